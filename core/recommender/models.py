#!/usr/bin/env python3
"""
Recommendation result models.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from core.scoring.models import ModuleScores, ScoreBreakdown


class CenterSummary(BaseModel):
    """Compact card data for a recommended center."""
    address: Optional[str] = None
    phone: Optional[str] = None
    distance_meters: Optional[int] = None
    distance_text: Optional[str] = None
    walk_time: Optional[str] = None


class RecommendationResult(BaseModel):
    center_id: int
    center_name: str
    rank: int
    total_score: float
    grade: str
    scores: ModuleScores
    breakdown: ScoreBreakdown
    reasons: List[str] = Field(default_factory=list, max_length=3)
    center: CenterSummary = Field(default_factory=CenterSummary)
