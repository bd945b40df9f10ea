import logging
from typing import Optional, Sequence

from sqlalchemy.orm import sessionmaker

from core.recommender.models import RecommendationResult
from core.scoring.models import Coordinate
from database.database import db_session_scope
from database.repositories.recommendation_log import RecommendationLogRepository

logger = logging.getLogger(__name__)


class DatabaseRecommendationLogSink:
    """Writes recommendation log rows in their own transaction."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def record_recommendations(
        self,
        results: Sequence[RecommendationResult],
        location: Coordinate,
        session_id: Optional[str],
        user_id: Optional[int]
    ) -> None:
        with db_session_scope(self.session_factory) as session:
            count = RecommendationLogRepository(session).record_recommendations(
                results, location, session_id, user_id
            )
        logger.info(f"Logged {count} recommendations (session={session_id}, user={user_id})")
