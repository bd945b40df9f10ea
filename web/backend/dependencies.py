#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import logging
from functools import lru_cache
from typing import Generator, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from core.cache import RecommendationCacheService
from core.config_loader import get_config
from core.recommender import BatchRecommender, RecommendationService
from core.scoring import ScoreAggregator
from database.database import SessionLocal
from database.log_sink import DatabaseRecommendationLogSink
from database.repositories import CenterRepository
from .services import CenterService

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@lru_cache()
def get_aggregator() -> ScoreAggregator:
    """Process-wide aggregator; owns the shared scorer pool."""
    return ScoreAggregator.from_config(get_config())


@lru_cache()
def get_cache() -> Optional[RecommendationCacheService]:
    cache_config = get_config().cache
    if not cache_config.enabled:
        logger.info("Recommendation cache disabled by configuration")
        return None
    return RecommendationCacheService(
        redis_url=cache_config.redis_url,
        password=cache_config.password,
        ttl_seconds=cache_config.ttl_seconds,
        key_prefix=cache_config.key_prefix,
    )


@lru_cache()
def get_log_sink() -> DatabaseRecommendationLogSink:
    return DatabaseRecommendationLogSink(SessionLocal)


def get_recommendation_service(db: Session = Depends(get_db)) -> RecommendationService:
    config = get_config()
    recommender = BatchRecommender.from_config(config, get_aggregator(), get_log_sink())
    return RecommendationService(
        directory=CenterRepository(db),
        recommender=recommender,
        cache=get_cache(),
        config=config.recommendation,
    )


def get_center_service(db: Session = Depends(get_db)) -> CenterService:
    return CenterService(db, get_config().scoring)
