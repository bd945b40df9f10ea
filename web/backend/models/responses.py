#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from core.recommender.models import RecommendationResult
from core.scoring.models import OperatingStatusResult, UpcomingHoliday, WeeklyHours


class SearchCriteria(BaseModel):
    latitude: float
    longitude: float
    max_distance_km: float
    limit: int
    has_profile: bool
    severity_code: Optional[str] = None


class RecommendationsResponse(BaseModel):
    """Ranked recommendations."""
    success: bool
    count: int
    recommendations: List[RecommendationResult]
    search_criteria: SearchCriteria


class OperatingStatusResponse(BaseModel):
    """Current operating status of a center with its weekly schedule."""
    success: bool
    center_id: int
    center_name: str
    current: OperatingStatusResult
    weekly_hours: List[WeeklyHours] = Field(default_factory=list)
    upcoming_holidays: List[UpcomingHoliday] = Field(default_factory=list)
