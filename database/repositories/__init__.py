from database.repositories.base import BaseRepository
from database.repositories.center import CenterRepository
from database.repositories.recommendation_log import RecommendationLogRepository

__all__ = [
    'BaseRepository',
    'CenterRepository',
    'RecommendationLogRepository',
]
