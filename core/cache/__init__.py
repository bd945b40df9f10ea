"""Cache Module - Caching services."""
from core.cache.recommendation_cache import (
    RecommendationCacheService,
    get_recommendation_cache,
    init_recommendation_cache,
    CACHE_TTL_SECONDS
)

__all__ = [
    'RecommendationCacheService',
    'get_recommendation_cache',
    'init_recommendation_cache',
    'CACHE_TTL_SECONDS'
]
