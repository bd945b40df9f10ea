#!/usr/bin/env python3
"""
Score Aggregator - runs the four scoring modules for one center and combines them.

Each module runs as its own task on a shared scorer pool. A module that
raises is replaced by the neutral default score (50) and named in
`failed_modules`; the center only fails as a whole when all four modules
fail or when the modules do not finish before the per-center deadline.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime
from typing import Callable, Dict, Mapping, Optional
from zoneinfo import ZoneInfo

from core.config_loader import AppConfig
from core.exceptions import AllModulesFailedError, ScoringTimeoutError
from core.scoring.constants import (
    DEFAULT_CLOSING_SOON_MINUTES,
    DEFAULT_MODULE_SCORE,
    MODULE_NAMES,
    NEXT_OPEN_SEARCH_DAYS,
    SCORE_GRADES,
)
from core.scoring.distance import RoadRegion, calculate_distance_info
from core.scoring.models import (
    Center,
    Coordinate,
    ModuleOutcome,
    ModuleScores,
    ScoreBreakdown,
    ScoreDetails,
    UserProfile,
)
from core.scoring.operating_status import DEFAULT_TIMEZONE, evaluate_operating_status
from core.scoring.program import calculate_program_score
from core.scoring.specialty import calculate_specialty_score
from core.scoring.weights import DEFAULT_PROFILE, DEFAULT_WEIGHTS, ScoringWeights
from core.utils import round_to_cents

logger = logging.getLogger(__name__)


def calculate_total_score(scores: Mapping[str, float], weights: ScoringWeights) -> float:
    """Weighted sum of module scores, rounded to two decimals."""
    return round_to_cents(sum(scores[name] * weights.for_module(name) for name in MODULE_NAMES))


def get_score_grade(total_score: float) -> str:
    for minimum, grade in SCORE_GRADES:
        if total_score >= minimum:
            return grade
    return 'D'


def _guarded(name: str, fn: Callable, *args, **kwargs) -> ModuleOutcome:
    """Run one scorer, turning any exception into a default-score outcome."""
    try:
        detail = fn(*args, **kwargs)
        return ModuleOutcome(name=name, score=detail.score, detail=detail)
    except Exception as e:
        logger.warning(f"Scoring module '{name}' failed, using default {DEFAULT_MODULE_SCORE}: {e}")
        return ModuleOutcome(
            name=name,
            score=DEFAULT_MODULE_SCORE,
            detail=None,
            failed=True,
            error=str(e)
        )


class ScoreAggregator:
    """
    Combines distance, operating status, specialty and program scores.

    The aggregator owns its scorer pool unless one is passed in. Weights are
    supplied per call so that severity-based re-weighting stays outside it.
    """

    def __init__(
        self,
        executor: Optional[ThreadPoolExecutor] = None,
        *,
        max_workers: int = 8,
        timezone: str = DEFAULT_TIMEZONE,
        closing_soon_minutes: int = DEFAULT_CLOSING_SOON_MINUTES,
        road_region: str = RoadRegion.DEFAULT,
        search_days: int = NEXT_OPEN_SEARCH_DAYS,
        timeout_seconds: Optional[float] = 5.0
    ):
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="scorer"
        )
        self.timezone = timezone
        self.closing_soon_minutes = closing_soon_minutes
        self.road_region = road_region
        self.search_days = search_days
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(cls, config: AppConfig) -> 'ScoreAggregator':
        return cls(
            max_workers=config.scoring.scorer_workers,
            timezone=config.scoring.timezone,
            closing_soon_minutes=config.scoring.closing_soon_minutes,
            road_region=config.scoring.road_region,
            search_days=config.scoring.next_open_search_days,
            timeout_seconds=config.recommendation.center_timeout_seconds,
        )

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()

    def now(self) -> datetime:
        return datetime.now(ZoneInfo(self.timezone))

    def score_center(
        self,
        center: Center,
        user_location: Coordinate,
        profile: Optional[UserProfile] = None,
        now: Optional[datetime] = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        weights_profile: str = DEFAULT_PROFILE
    ) -> ScoreBreakdown:
        """
        Score one center.

        Args:
            center: Center snapshot
            user_location: Where the user is
            profile: Optional user profile for program matching
            now: Evaluation time for the operating status (defaults to now)
            weights: Weight set to combine module scores with
            weights_profile: Name of the weight set, echoed in the breakdown

        Returns:
            ScoreBreakdown, possibly degraded (success with failed modules)

        Raises:
            AllModulesFailedError: If every module failed
            ScoringTimeoutError: If the modules missed the deadline
        """
        now = now or self.now()

        futures = {
            'distance': self._executor.submit(
                _guarded, 'distance', calculate_distance_info,
                user_location, center.location, self.road_region
            ),
            'operating': self._executor.submit(
                _guarded, 'operating', evaluate_operating_status,
                now, center.operating_hours, center.holidays,
                timezone=self.timezone,
                closing_soon_minutes=self.closing_soon_minutes,
                search_days=self.search_days
            ),
            'specialty': self._executor.submit(
                _guarded, 'specialty', calculate_specialty_score, center.staff
            ),
            'program': self._executor.submit(
                _guarded, 'program', calculate_program_score, center.programs, profile
            ),
        }

        _, not_done = wait(futures.values(), timeout=self.timeout_seconds)
        if not_done:
            for future in not_done:
                future.cancel()
            raise ScoringTimeoutError(
                f"Center {center.id} scoring exceeded {self.timeout_seconds}s",
                center_id=center.id
            )

        outcomes: Dict[str, ModuleOutcome] = {name: futures[name].result() for name in MODULE_NAMES}
        failed = [name for name in MODULE_NAMES if outcomes[name].failed]

        if len(failed) == len(MODULE_NAMES):
            raise AllModulesFailedError(
                f"All scoring modules failed for center {center.id}",
                center_id=center.id
            )

        scores = {name: outcomes[name].score for name in MODULE_NAMES}

        return ScoreBreakdown(
            scores=ModuleScores(**scores),
            details=ScoreDetails(**{name: outcomes[name].detail for name in MODULE_NAMES}),
            total_score=calculate_total_score(scores, weights),
            success=True,
            failed_modules=failed,
            weights_profile=weights_profile,
        )
