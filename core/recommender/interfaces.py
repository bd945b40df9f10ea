"""Collaborator interfaces consumed by the recommender."""

from typing import List, Optional, Protocol, Sequence

from core.recommender.models import RecommendationResult
from core.scoring.models import Center, Coordinate


class CenterDirectory(Protocol):
    def fetch_active_centers_near(self, location: Coordinate, radius_meters: int) -> List[Center]:
        """Active centers with coordinates within the radius, nearest first."""
        ...


class RecommendationCache(Protocol):
    """Must never raise: failures read as a miss or a failed write."""

    def get(self, key: str) -> Optional[List[RecommendationResult]]:
        ...

    def set(self, key: str, value: Sequence[RecommendationResult], ttl_seconds: Optional[int] = None) -> bool:
        ...


class RecommendationLogSink(Protocol):
    def record_recommendations(
        self,
        results: Sequence[RecommendationResult],
        location: Coordinate,
        session_id: Optional[str],
        user_id: Optional[int]
    ) -> None:
        ...
