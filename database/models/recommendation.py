from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Text, Float, TIMESTAMP, ForeignKey, Index

from .base import Base


class RecommendationLog(Base):
    """One row per recommended center per request."""
    __tablename__ = 'recommendation_log'

    id = Column(Integer, primary_key=True, autoincrement=True)
    center_id = Column(Integer, ForeignKey('center.id', ondelete='CASCADE'), nullable=False)

    user_id = Column(Integer)
    session_id = Column(Text)
    recommended_at = Column(
        TIMESTAMP(timezone=True), nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    user_latitude = Column(Float, nullable=False)
    user_longitude = Column(Float, nullable=False)
    total_score = Column(Float, nullable=False)
    rank_position = Column(Integer, nullable=False)
    recommendation_type = Column(Text, nullable=False, default='RULE_BASED')

    __table_args__ = (
        Index('ix_recommendation_log_session', 'session_id'),
        Index('ix_recommendation_log_user', 'user_id'),
        Index('ix_recommendation_log_center', 'center_id', 'recommended_at'),
    )
