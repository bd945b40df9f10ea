#!/usr/bin/env python3
"""
Builders for center snapshots used across the unit tests.
"""

from datetime import time
from typing import Optional, Sequence

from core.scoring.models import (
    Center,
    Coordinate,
    HolidayException,
    OperatingHourRule,
    Program,
    StaffCertification,
)

SEOUL = Coordinate(latitude=37.5665, longitude=126.9780)


def weekday_hours(open_at: time = time(9, 0), close_at: time = time(18, 0)):
    """Monday to Friday open, weekend closed."""
    rules = [OperatingHourRule(day_of_week=d, open_time=open_at, close_time=close_at) for d in range(1, 6)]
    rules += [OperatingHourRule(day_of_week=d, is_open=False) for d in (6, 7)]
    return tuple(rules)


def every_day_hours(open_at: time = time(9, 0), close_at: time = time(18, 0)):
    return tuple(OperatingHourRule(day_of_week=d, open_time=open_at, close_time=close_at) for d in range(1, 8))


def programs(count: int, active: bool = True, prefix: str = "Program"):
    return tuple(
        Program(id=i + 1, name=f"{prefix} {i + 1}", category="개인상담", is_active=active)
        for i in range(count)
    )


def make_center(
    center_id: int = 1,
    name: Optional[str] = None,
    location: Coordinate = SEOUL,
    hours: Sequence[OperatingHourRule] = None,
    holidays: Sequence[HolidayException] = (),
    staff: Sequence[StaffCertification] = None,
    center_programs: Sequence[Program] = None,
) -> Center:
    return Center(
        id=center_id,
        name=name or f"Center {center_id}",
        location=location,
        address=f"{center_id} Sejong-daero, Jung-gu, Seoul",
        phone="02-000-0000",
        operating_hours=tuple(hours) if hours is not None else every_day_hours(),
        holidays=tuple(holidays),
        staff=tuple(staff) if staff is not None else (StaffCertification("정신건강의학과 전문의", 1),),
        programs=tuple(center_programs) if center_programs is not None else programs(6),
    )


def offset(location: Coordinate, north_meters: float) -> Coordinate:
    """A point `north_meters` due north of `location`."""
    return Coordinate(latitude=location.latitude + north_meters / 111_195, longitude=location.longitude)
