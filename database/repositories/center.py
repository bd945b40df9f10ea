import math
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from core.exceptions import InvalidCoordinateError
from core.scoring import models as scoring
from core.scoring.distance import calculate_haversine_distance
from database.models import Center
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

# Meters per degree of latitude, used for the bounding-box prefilter
METERS_PER_DEGREE = 111_320


def to_snapshot(center: Center) -> scoring.Center:
    """Convert an ORM center into the read-only snapshot the scorers consume."""
    return scoring.Center(
        id=center.id,
        name=center.name,
        location=scoring.Coordinate(latitude=center.latitude, longitude=center.longitude),
        address=center.address,
        phone=center.phone,
        operating_hours=tuple(
            scoring.OperatingHourRule(
                day_of_week=h.day_of_week,
                open_time=h.open_time,
                close_time=h.close_time,
                is_open=bool(h.is_open),
            )
            for h in center.operating_hours
        ),
        holidays=tuple(
            scoring.HolidayException(
                holiday_date=h.holiday_date,
                name=h.holiday_name or "",
                is_regular=bool(h.is_regular),
            )
            for h in center.holidays
        ),
        staff=tuple(
            scoring.StaffCertification(label=s.staff_type, headcount=s.staff_count or 0)
            for s in center.staff
        ),
        programs=tuple(
            scoring.Program(
                id=p.id,
                name=p.program_name,
                category=p.program_type,
                target_group=p.target_group,
                description=p.description,
                is_online_available=bool(p.is_online_available),
                is_free=bool(p.is_free),
                fee_amount=p.fee_amount,
                is_active=True,
            )
            for p in center.programs
            if p.is_active
        ),
    )


class CenterRepository(BaseRepository):
    def _with_relations(self, stmt):
        return stmt.options(
            selectinload(Center.operating_hours),
            selectinload(Center.holidays),
            selectinload(Center.staff),
            selectinload(Center.programs),
        )

    def get_center(self, center_id: int) -> Optional[Center]:
        stmt = self._with_relations(select(Center).where(Center.id == center_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_center_snapshot(self, center_id: int) -> Optional[scoring.Center]:
        center = self.get_center(center_id)
        if center is None or center.latitude is None or center.longitude is None:
            return None
        return to_snapshot(center)

    def fetch_active_centers_near(
        self,
        location: scoring.Coordinate,
        radius_meters: int
    ) -> List[scoring.Center]:
        """
        Active centers with coordinates within `radius_meters`, nearest first.

        A bounding box narrows the query; the exact straight-line distance
        decides membership.
        """
        lat_delta = radius_meters / METERS_PER_DEGREE
        lng_delta = radius_meters / (METERS_PER_DEGREE * max(math.cos(math.radians(location.latitude)), 0.01))

        stmt = self._with_relations(
            select(Center).where(
                Center.is_active.is_(True),
                Center.latitude.is_not(None),
                Center.longitude.is_not(None),
                Center.latitude.between(location.latitude - lat_delta, location.latitude + lat_delta),
                Center.longitude.between(location.longitude - lng_delta, location.longitude + lng_delta),
            )
        )
        rows = self.db.execute(stmt).scalars().all()

        within: List[Tuple[int, Center]] = []
        for center in rows:
            try:
                distance = calculate_haversine_distance(
                    location,
                    scoring.Coordinate(latitude=center.latitude, longitude=center.longitude)
                )
            except InvalidCoordinateError as e:
                logger.warning(f"Skipping center {center.id} with invalid stored coordinates: {e}")
                continue
            if distance <= radius_meters:
                within.append((distance, center))

        within.sort(key=lambda item: (item[0], item[1].id))
        logger.debug(f"{len(within)} of {len(rows)} boxed centers within {radius_meters}m")
        return [to_snapshot(center) for _, center in within]
