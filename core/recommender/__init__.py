"""
Recommender Module - ranks centers for a request.

Public API:
- RecommendationService: Validation, read-through cache, directory lookup
- BatchRecommender: Parallel per-center scoring, ranking, truncation
- RecommendationResult: One ranked center
"""

from core.recommender.models import RecommendationResult, CenterSummary
from core.recommender.batch import BatchRecommender
from core.recommender.service import RecommendationService, build_cache_key

__all__ = [
    'RecommendationService',
    'BatchRecommender',
    'RecommendationResult',
    'CenterSummary',
    'build_cache_key',
]
