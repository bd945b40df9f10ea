#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from core.scoring.models import SeverityCode, UserProfile


class UserProfileRequest(BaseModel):
    """Self-assessment profile. Every field is optional."""
    symptoms: List[str] = Field(default_factory=list, max_length=20, description="Reported symptoms")
    preferred_category: Optional[str] = Field(None, description="Preferred program category")
    age_group: Optional[str] = Field(None, description="Age group, e.g. 30대 or 30s")
    prefer_online: Optional[bool] = Field(None, description="Whether online programs are preferred")
    prefer_free: Optional[bool] = Field(None, description="Whether free programs are preferred")

    def to_profile(self) -> UserProfile:
        return UserProfile(
            symptoms=tuple(self.symptoms),
            preferred_category=self.preferred_category,
            age_group=self.age_group,
            prefer_online=self.prefer_online,
            prefer_free=self.prefer_free,
        )


class RecommendationRequest(BaseModel):
    """Request for ranked center recommendations."""
    latitude: float = Field(..., ge=-90, le=90, description="User latitude")
    longitude: float = Field(..., ge=-180, le=180, description="User longitude")
    user_profile: Optional[UserProfileRequest] = Field(
        None,
        description="Optional profile; omit for distance/quality ranking only"
    )
    max_distance: float = Field(10, ge=1, le=50, description="Search radius in km (1-50)")
    limit: int = Field(5, ge=1, le=20, description="Maximum results to return (1-20)")
    severity_code: Optional[SeverityCode] = Field(None, description="Assessment severity: LOW, MID or HIGH")
    session_id: Optional[str] = Field(None, max_length=128, description="Anonymous session id for logging")
    user_id: Optional[int] = Field(None, description="Signed-in user id for logging")
