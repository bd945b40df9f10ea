#!/usr/bin/env python3
"""
Scoring Models - Data structures for center scoring.

Inputs are frozen dataclasses: they are per-request snapshots handed to the
scorers by the center directory and are never mutated while a batch runs.

Outputs are pydantic models so that breakdowns can be serialized as-is into
the result cache and the HTTP responses.
"""

from dataclasses import dataclass, field, asdict
from datetime import date, time
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coordinate:
    """Geographic point in decimal degrees."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class OperatingHourRule:
    """Weekly opening rule. day_of_week is 1-7 with Monday = 1."""
    day_of_week: int
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    is_open: bool = True


@dataclass(frozen=True)
class HolidayException:
    """A dated closure. is_regular=False marks an ad-hoc temporary closure."""
    holiday_date: date
    name: str = ""
    is_regular: bool = True


@dataclass(frozen=True)
class StaffCertification:
    label: str
    headcount: int = 1


@dataclass(frozen=True)
class Program:
    name: str
    category: Optional[str] = None
    target_group: Optional[str] = None
    description: Optional[str] = None
    is_online_available: bool = False
    is_free: bool = True
    fee_amount: Optional[int] = None
    is_active: bool = True
    id: Optional[int] = None


@dataclass(frozen=True)
class Center:
    id: int
    name: str
    location: Coordinate
    address: Optional[str] = None
    phone: Optional[str] = None
    operating_hours: Tuple[OperatingHourRule, ...] = ()
    holidays: Tuple[HolidayException, ...] = ()
    staff: Tuple[StaffCertification, ...] = ()
    programs: Tuple[Program, ...] = ()


@dataclass(frozen=True)
class UserProfile:
    """
    Optional self-assessment profile.

    Every field may be unset. A profile with no fields set is still a
    profile: it takes the matching path, not the diversity fallback.
    """
    symptoms: Tuple[str, ...] = ()
    preferred_category: Optional[str] = None
    age_group: Optional[str] = None
    prefer_online: Optional[bool] = None
    prefer_free: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['UserProfile']:
        if data is None:
            return None
        return cls(
            symptoms=tuple(data.get('symptoms') or ()),
            preferred_category=data.get('preferred_category'),
            age_group=data.get('age_group'),
            prefer_online=data.get('prefer_online'),
            prefer_free=data.get('prefer_free'),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['symptoms'] = list(self.symptoms)
        return data


class SeverityCode(str, Enum):
    """Self-assessment severity bucket."""
    LOW = "LOW"
    MID = "MID"
    HIGH = "HIGH"


class OperatingStatus(str, Enum):
    NO_INFO = "NO_INFO"
    TEMP_CLOSED = "TEMP_CLOSED"
    HOLIDAY = "HOLIDAY"
    CLOSING_SOON = "CLOSING_SOON"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


# ---------------------------------------------------------------------------
# Per-module details
# ---------------------------------------------------------------------------

class DistanceInfo(BaseModel):
    straight_distance_meters: int
    adjusted_distance_meters: int
    score: int
    distance_text: str
    walk_minutes: int
    walk_time: str


class NextOpen(BaseModel):
    on_date: date
    day_name: str
    open_time: str  # HH:MM


class OperatingStatusResult(BaseModel):
    status: OperatingStatus
    score: int
    message: str
    color: str
    closing_time: Optional[str] = None
    minutes_until_close: Optional[int] = None
    next_open: Optional[NextOpen] = None


class WeeklyHours(BaseModel):
    day_of_week: int
    day_name: str
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    is_open: bool


class UpcomingHoliday(BaseModel):
    on_date: date
    name: str
    is_regular: bool


class OperatingReport(BaseModel):
    """Current status plus the data a center detail page shows around it."""
    current: OperatingStatusResult
    weekly_hours: List[WeeklyHours] = Field(default_factory=list)
    upcoming_holidays: List[UpcomingHoliday] = Field(default_factory=list)


class SpecialtyInfo(BaseModel):
    score: int
    top_certification: Optional[str] = None
    top_certification_score: int = 0
    total_staff_count: int = 0
    certified_staff_count: int = 0
    grade: str = "D"
    reason: str = ""


class ProgramMatch(BaseModel):
    program_id: Optional[int] = None
    program_name: str
    category: Optional[str] = None
    score: int
    reasons: List[str] = Field(default_factory=list)


class ProgramScoreInfo(BaseModel):
    score: int
    active_program_count: int
    mode: str  # matching | diversity | none
    matched_programs: List[ProgramMatch] = Field(default_factory=list)
    reason: str = ""


# ---------------------------------------------------------------------------
# Aggregated breakdown
# ---------------------------------------------------------------------------

class ModuleScores(BaseModel):
    distance: int
    operating: int
    specialty: int
    program: int


class ScoreDetails(BaseModel):
    """One detail record per module; None when that module failed."""
    distance: Optional[DistanceInfo] = None
    operating: Optional[OperatingStatusResult] = None
    specialty: Optional[SpecialtyInfo] = None
    program: Optional[ProgramScoreInfo] = None


class ScoreBreakdown(BaseModel):
    scores: ModuleScores
    details: ScoreDetails
    total_score: float
    success: bool = True
    failed_modules: List[str] = Field(default_factory=list)
    weights_profile: str = "default"


@dataclass
class ModuleOutcome:
    """Result of one guarded scorer call."""
    name: str
    score: int
    detail: Optional[BaseModel] = None
    failed: bool = False
    error: Optional[str] = field(default=None, repr=False)
