#!/usr/bin/env python3
"""
Command line entry point.

    python main.py init-db
    python main.py recommend --lat 37.5665 --lng 126.9780 [--profile profile.json] [--severity MID]
    python main.py status --center-id 12 [--at 2026-03-02T10:00:00+09:00]
    python main.py serve
"""

import sys
import json
import logging
import argparse
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from core.config_loader import load_config, AppConfig
from core.exceptions import RecommendationError, CenterNotFoundError
from core.scoring.models import UserProfile

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# The log write runs on a daemon thread; give it a chance to finish before exit
LOG_WAIT_SECONDS = 5.0


def _load_profile(path: Optional[str]) -> Optional[UserProfile]:
    if not path:
        return None
    with open(path, 'r', encoding='utf-8') as f:
        return UserProfile.from_dict(json.load(f))


def _session_factory(config: AppConfig):
    """Session factory for the database named by the loaded config file."""
    from database.database import build_engine, make_session_factory
    return make_session_factory(build_engine(config.database.url))


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def run_recommend(args, config: AppConfig) -> int:
    from core.cache import RecommendationCacheService
    from core.recommender import BatchRecommender, RecommendationService
    from core.scoring import ScoreAggregator
    from database.log_sink import DatabaseRecommendationLogSink
    from database.uow import center_uow

    cache = None
    if config.cache.enabled and not args.no_cache:
        cache = RecommendationCacheService(
            redis_url=config.cache.redis_url,
            password=config.cache.password,
            ttl_seconds=config.cache.ttl_seconds,
            key_prefix=config.cache.key_prefix,
        )

    session_factory = _session_factory(config)
    with ScoreAggregator.from_config(config) as aggregator, center_uow(session_factory) as directory:
        recommender = BatchRecommender.from_config(
            config, aggregator, DatabaseRecommendationLogSink(session_factory),
            log_wait_seconds=LOG_WAIT_SECONDS
        )
        service = RecommendationService(
            directory=directory,
            recommender=recommender,
            cache=cache,
            config=config.recommendation,
        )
        results = service.get_recommendations(
            latitude=args.lat,
            longitude=args.lng,
            profile=_load_profile(args.profile),
            max_distance_km=args.max_distance,
            limit=args.limit,
            severity_code=args.severity,
            session_id=args.session_id,
            now=_parse_time(args.at),
        )

    print(json.dumps([r.model_dump(mode='json') for r in results], ensure_ascii=False, indent=2))
    return 0


def run_status(args, config: AppConfig) -> int:
    from core.scoring.operating_status import build_operating_report
    from database.repositories.center import to_snapshot
    from database.uow import center_uow

    with center_uow(_session_factory(config)) as repo:
        center = repo.get_center(args.center_id)
        if center is None:
            raise CenterNotFoundError(f"Center {args.center_id} not found")
        snapshot = to_snapshot(center)

    now = _parse_time(args.at) or datetime.now(ZoneInfo(config.scoring.timezone))
    report = build_operating_report(
        now,
        snapshot.operating_hours,
        snapshot.holidays,
        timezone=config.scoring.timezone,
        closing_soon_minutes=config.scoring.closing_soon_minutes,
        search_days=config.scoring.next_open_search_days,
    )
    print(json.dumps(report.model_dump(mode='json'), ensure_ascii=False, indent=2))
    return 0


def run_init_db(args, config: AppConfig) -> int:
    from database.database import build_engine
    from database.init_db import init_db
    init_db(bind=build_engine(config.database.url))
    return 0


def run_serve(args, config: AppConfig) -> int:
    from web.backend.app import main as serve
    serve()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Center recommendation engine")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    subparsers = parser.add_subparsers(dest='command', required=True)

    recommend = subparsers.add_parser('recommend', help='Recommend centers near a location')
    recommend.add_argument('--lat', type=float, required=True, help='User latitude')
    recommend.add_argument('--lng', type=float, required=True, help='User longitude')
    recommend.add_argument('--profile', type=str, default=None, help='JSON file with a user profile')
    recommend.add_argument('--severity', type=str, choices=['LOW', 'MID', 'HIGH'], default=None,
                           help='Assessment severity code')
    recommend.add_argument('--limit', type=int, default=None, help='Maximum results')
    recommend.add_argument('--max-distance', type=float, default=None, help='Search radius in km')
    recommend.add_argument('--session-id', type=str, default=None, help='Session id for the recommendation log')
    recommend.add_argument('--at', type=str, default=None, help='Evaluate opening hours at this ISO time')
    recommend.add_argument('--no-cache', action='store_true', help='Bypass the result cache')
    recommend.set_defaults(handler=run_recommend)

    status = subparsers.add_parser('status', help='Show the operating status of a center')
    status.add_argument('--center-id', type=int, required=True)
    status.add_argument('--at', type=str, default=None, help='Evaluate at this ISO time')
    status.set_defaults(handler=run_status)

    init = subparsers.add_parser('init-db', help='Create database tables')
    init.set_defaults(handler=run_init_db)

    serve = subparsers.add_parser('serve', help='Run the HTTP API')
    serve.set_defaults(handler=run_serve)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    try:
        return args.handler(args, config)
    except RecommendationError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
