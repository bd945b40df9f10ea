#!/usr/bin/env python3
"""
Center service - business logic for center detail endpoints.
"""

import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from core.config_loader import ScoringConfig
from core.exceptions import CenterNotFoundError
from core.scoring.operating_status import build_operating_report
from database.repositories.center import CenterRepository, to_snapshot
from ..models.responses import OperatingStatusResponse

logger = logging.getLogger(__name__)


class CenterService:
    """Service for reading center details."""

    def __init__(self, db: Session, scoring_config: Optional[ScoringConfig] = None):
        self.db = db
        self.scoring_config = scoring_config or ScoringConfig()

    def get_operating_status(self, center_id: int, at: Optional[datetime] = None) -> OperatingStatusResponse:
        """
        Operating status of a center at `at` (defaults to now).

        Raises:
            CenterNotFoundError: If the center does not exist.
        """
        center = CenterRepository(self.db).get_center(center_id)
        if center is None:
            raise CenterNotFoundError(f"Center {center_id} not found")

        snapshot = to_snapshot(center)
        now = at or datetime.now(ZoneInfo(self.scoring_config.timezone))

        report = build_operating_report(
            now,
            snapshot.operating_hours,
            snapshot.holidays,
            timezone=self.scoring_config.timezone,
            closing_soon_minutes=self.scoring_config.closing_soon_minutes,
            search_days=self.scoring_config.next_open_search_days,
        )

        return OperatingStatusResponse(
            success=True,
            center_id=snapshot.id,
            center_name=snapshot.name,
            current=report.current,
            weekly_hours=report.weekly_hours,
            upcoming_holidays=report.upcoming_holidays,
        )
