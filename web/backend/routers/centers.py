#!/usr/bin/env python3
"""
Center endpoints - center detail data.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from ..dependencies import get_center_service
from ..models.responses import OperatingStatusResponse
from ..services import CenterService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/centers", tags=["centers"])


@router.get("/{center_id}/operating-status", response_model=OperatingStatusResponse)
def get_operating_status(
    center_id: int = Path(..., ge=1, description="Center id"),
    at: Optional[datetime] = Query(default=None, description="Evaluate at this ISO time instead of now"),
    service: CenterService = Depends(get_center_service)
):
    """
    Get the current operating status of a center.

    Includes the weekly schedule and up to five upcoming holidays.
    """
    return service.get_operating_status(center_id, at)
