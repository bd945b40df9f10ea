import logging
from typing import Optional, Sequence

from core.recommender.models import RecommendationResult
from core.scoring.models import Coordinate
from database.models import RecommendationLog
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

RECOMMENDATION_TYPE = 'RULE_BASED'


class RecommendationLogRepository(BaseRepository):
    def record_recommendations(
        self,
        results: Sequence[RecommendationResult],
        location: Coordinate,
        session_id: Optional[str],
        user_id: Optional[int]
    ) -> int:
        """Add one log row per result. The caller owns the transaction."""
        for position, result in enumerate(results, start=1):
            self.db.add(RecommendationLog(
                center_id=result.center_id,
                user_id=user_id,
                session_id=session_id,
                user_latitude=location.latitude,
                user_longitude=location.longitude,
                total_score=result.total_score,
                rank_position=result.rank or position,
                recommendation_type=RECOMMENDATION_TYPE,
            ))
        self.flush()
        return len(results)

    def count_for_session(self, session_id: str) -> int:
        return self.db.query(RecommendationLog).filter(RecommendationLog.session_id == session_id).count()
