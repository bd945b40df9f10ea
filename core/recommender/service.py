#!/usr/bin/env python3
"""
Recommendation Service - request entry point.

Validates the request, reads through the result cache, asks the center
directory for candidates within the search radius and hands them to the
BatchRecommender. Cache problems never reach the caller.
"""

import logging
from datetime import datetime
from typing import List, Optional, Union

from core.config_loader import RecommendationConfig
from core.exceptions import InvalidRequestError
from core.recommender.batch import BatchRecommender
from core.recommender.interfaces import CenterDirectory, RecommendationCache
from core.recommender.models import RecommendationResult
from core.scoring.distance import validate_coordinate
from core.scoring.models import Coordinate, SeverityCode, UserProfile
from core.scoring.weights import parse_severity
from core.utils import RequestFingerprinter

logger = logging.getLogger(__name__)


def build_cache_key(
    location: Coordinate,
    profile: Optional[UserProfile],
    max_distance_km: float,
    limit: int,
    severity_code: Optional[SeverityCode] = None
) -> str:
    """
    Deterministic key for a request.

    Location is rounded to four decimals (about 11 m) so nearby requests
    share an entry. Severity is part of the key because it changes weights.
    """
    payload = {
        'lat': f"{location.latitude:.4f}",
        'lng': f"{location.longitude:.4f}",
        'profile': profile.to_dict() if profile is not None else None,
        'dist': max_distance_km,
        'limit': limit,
        'severity': severity_code.value if severity_code else None,
    }
    return RequestFingerprinter.calculate(payload)


class RecommendationService:

    def __init__(
        self,
        directory: CenterDirectory,
        recommender: BatchRecommender,
        cache: Optional[RecommendationCache] = None,
        config: Optional[RecommendationConfig] = None
    ):
        self.directory = directory
        self.recommender = recommender
        self.cache = cache
        self.config = config or RecommendationConfig()

    def validate_request(
        self,
        latitude: float,
        longitude: float,
        max_distance_km: Optional[float],
        limit: Optional[int]
    ):
        location = Coordinate(latitude=latitude, longitude=longitude)
        validate_coordinate(location)

        if max_distance_km is None:
            max_distance_km = self.config.default_max_distance_km
        if not self.config.min_distance_km <= max_distance_km <= self.config.max_distance_km:
            raise InvalidRequestError(
                f"max_distance_km must be between {self.config.min_distance_km} "
                f"and {self.config.max_distance_km}, got {max_distance_km}"
            )

        if limit is None:
            limit = self.config.default_limit
        if not 1 <= limit <= self.config.max_limit:
            raise InvalidRequestError(f"limit must be between 1 and {self.config.max_limit}, got {limit}")

        return location, max_distance_km, limit

    def get_recommendations(
        self,
        latitude: float,
        longitude: float,
        profile: Optional[UserProfile] = None,
        max_distance_km: Optional[float] = None,
        limit: Optional[int] = None,
        severity_code: Union[str, SeverityCode, None] = None,
        session_id: Optional[str] = None,
        user_id: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> List[RecommendationResult]:
        """
        Recommend centers near a location.

        Raises:
            InvalidRequestError: If coordinates, radius, limit or severity are invalid
        """
        location, max_distance_km, limit = self.validate_request(latitude, longitude, max_distance_km, limit)
        severity = parse_severity(severity_code)

        cache_key = build_cache_key(location, profile, max_distance_km, limit, severity)
        cached = self._read_cache(cache_key)
        if cached:
            logger.info(f"Returning {len(cached)} cached recommendations")
            return cached

        radius_meters = int(round(max_distance_km * 1000))
        centers = self.directory.fetch_active_centers_near(location, radius_meters)
        logger.info(f"Found {len(centers)} candidate centers within {max_distance_km}km")

        if not centers:
            return []

        results = self.recommender.recommend(
            centers,
            location,
            profile=profile,
            severity_code=severity,
            limit=limit,
            now=now,
            session_id=session_id,
            user_id=user_id,
        )

        if results:
            self._write_cache(cache_key, results)

        return results

    def _read_cache(self, key: str) -> Optional[List[RecommendationResult]]:
        if self.cache is None:
            return None
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning(f"Recommendation cache read failed: {e}")
            return None

    def _write_cache(self, key: str, results: List[RecommendationResult]) -> None:
        if self.cache is None:
            return
        try:
            self.cache.set(key, results)
        except Exception as e:
            logger.warning(f"Recommendation cache write failed: {e}")
