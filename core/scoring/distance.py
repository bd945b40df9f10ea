#!/usr/bin/env python3
"""
Distance scoring.

Straight-line (haversine) distance between the user and a center, scaled by
a static road-correction factor, decayed linearly to a 0-100 score that
reaches 0 at 10 km.
"""

import math
import logging
from typing import Union

from core.exceptions import InvalidCoordinateError
from core.scoring.constants import (
    EARTH_RADIUS_METERS,
    MAX_SCORED_DISTANCE_METERS,
    ROAD_CORRECTION_FACTORS,
    WALKING_METERS_PER_MINUTE,
)
from core.scoring.models import Coordinate, DistanceInfo
from core.utils import round_half_up

logger = logging.getLogger(__name__)


class RoadRegion:
    DENSE_URBAN = 'DENSE_URBAN'
    SUBURBAN = 'SUBURBAN'
    DEFAULT = 'DEFAULT'


def validate_coordinate(point: Coordinate) -> None:
    """Raise InvalidCoordinateError if latitude or longitude is out of range."""
    lat, lng = point.latitude, point.longitude
    if lat is None or lng is None or math.isnan(lat) or math.isnan(lng):
        raise InvalidCoordinateError(f"Coordinate is missing a value: ({lat}, {lng})")
    if not -90 <= lat <= 90:
        raise InvalidCoordinateError(f"Latitude must be between -90 and 90, got {lat}")
    if not -180 <= lng <= 180:
        raise InvalidCoordinateError(f"Longitude must be between -180 and 180, got {lng}")


def calculate_haversine_distance(a: Coordinate, b: Coordinate) -> int:
    """
    Great-circle distance between two points.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in whole meters (rounded)

    Raises:
        InvalidCoordinateError: If either point is out of range
    """
    validate_coordinate(a)
    validate_coordinate(b)

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = math.radians(b.latitude - a.latitude)
    d_lng = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # Floating error can push h a hair above 1 for antipodal points
    h = min(1.0, h)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return round_half_up(EARTH_RADIUS_METERS * c)


def apply_road_correction(meters: Union[int, float], region: str = RoadRegion.DEFAULT) -> int:
    """Scale a straight-line distance to an estimated road distance."""
    factor = ROAD_CORRECTION_FACTORS.get(region)
    if factor is None:
        logger.warning(f"Unknown road region '{region}', using DEFAULT factor")
        factor = ROAD_CORRECTION_FACTORS[RoadRegion.DEFAULT]
    return round_half_up(max(0, meters) * factor)


def calculate_distance_score(meters: Union[int, float]) -> int:
    """Linear decay from 100 at 0 m to 0 at 10 km and beyond."""
    if meters < 0:
        return 100
    if meters >= MAX_SCORED_DISTANCE_METERS:
        return 0
    return round_half_up(100 - (meters / MAX_SCORED_DISTANCE_METERS) * 100)


def format_distance(meters: Union[int, float]) -> str:
    if meters < 1000:
        return f"{round_half_up(max(0, meters))}m"
    return f"{meters / 1000:.1f}km"


def calculate_walk_minutes(meters: Union[int, float]) -> int:
    return max(1, math.ceil(max(0, meters) / WALKING_METERS_PER_MINUTE))


def format_walk_time(meters: Union[int, float]) -> str:
    minutes = calculate_walk_minutes(meters)
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    if rest == 0:
        return f"{hours} h"
    return f"{hours} h {rest} min"


def calculate_distance_info(
    user_location: Coordinate,
    center_location: Coordinate,
    region: str = RoadRegion.DEFAULT
) -> DistanceInfo:
    """Full distance detail for one center. Score and texts use the corrected distance."""
    straight = calculate_haversine_distance(user_location, center_location)
    adjusted = apply_road_correction(straight, region)

    return DistanceInfo(
        straight_distance_meters=straight,
        adjusted_distance_meters=adjusted,
        score=calculate_distance_score(adjusted),
        distance_text=format_distance(adjusted),
        walk_minutes=calculate_walk_minutes(adjusted),
        walk_time=format_walk_time(adjusted),
    )
