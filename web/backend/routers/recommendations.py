#!/usr/bin/env python3
"""
Recommendation endpoints - ranked centers near a location.
"""

import logging
from fastapi import APIRouter, Depends

from core.recommender import RecommendationService
from ..dependencies import get_recommendation_service
from ..models.requests import RecommendationRequest
from ..models.responses import RecommendationsResponse, SearchCriteria

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.post("", response_model=RecommendationsResponse)
def get_recommendations(
    request: RecommendationRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """
    Recommend centers near the given location.

    Without a profile, centers are ranked on distance, opening status,
    staff qualifications and program breadth. With a profile, programs are
    matched against it; with a severity code, program fit weighs more.
    """
    profile = request.user_profile.to_profile() if request.user_profile else None

    results = service.get_recommendations(
        latitude=request.latitude,
        longitude=request.longitude,
        profile=profile,
        max_distance_km=request.max_distance,
        limit=request.limit,
        severity_code=request.severity_code,
        session_id=request.session_id,
        user_id=request.user_id,
    )

    return RecommendationsResponse(
        success=True,
        count=len(results),
        recommendations=results,
        search_criteria=SearchCriteria(
            latitude=request.latitude,
            longitude=request.longitude,
            max_distance_km=request.max_distance,
            limit=request.limit,
            has_profile=profile is not None,
            severity_code=request.severity_code.value if request.severity_code else None,
        )
    )
