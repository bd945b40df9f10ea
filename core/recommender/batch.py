#!/usr/bin/env python3
"""
Batch Recommender - scores a list of candidate centers and ranks them.

One aggregation task per center runs on a bounded pool. Centers whose
aggregation fails are dropped without affecting the rest of the batch.
Results are sorted by total score (highest first, center id breaking ties)
and truncated to the requested limit.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import List, Optional, Sequence, Tuple, Union

from core.config_loader import AppConfig, ScoringConfig
from core.exceptions import InvalidRequestError, ScoringError
from core.recommender.interfaces import RecommendationLogSink
from core.recommender.models import CenterSummary, RecommendationResult
from core.recommender.reasons import build_reasons
from core.scoring.aggregator import ScoreAggregator, get_score_grade
from core.scoring.distance import validate_coordinate
from core.scoring.models import Center, Coordinate, ScoreBreakdown, SeverityCode, UserProfile
from core.scoring.weights import select_weights

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def build_result(center: Center, breakdown: ScoreBreakdown, rank: int) -> RecommendationResult:
    """Assemble a complete result from a finished breakdown."""
    distance = breakdown.details.distance

    summary = CenterSummary(
        address=center.address,
        phone=center.phone,
        distance_meters=distance.straight_distance_meters if distance else None,
        distance_text=distance.distance_text if distance else None,
        walk_time=distance.walk_time if distance else None,
    )

    return RecommendationResult(
        center_id=center.id,
        center_name=center.name,
        rank=rank,
        total_score=breakdown.total_score,
        grade=get_score_grade(breakdown.total_score),
        scores=breakdown.scores,
        breakdown=breakdown,
        reasons=build_reasons(breakdown),
        center=summary,
    )


class BatchRecommender:
    """
    Ranks candidate centers for one request.

    Example:
        recommender = BatchRecommender(ScoreAggregator(), max_workers=8)
        results = recommender.recommend(centers, Coordinate(37.5665, 126.9780), limit=5)
    """

    def __init__(
        self,
        aggregator: ScoreAggregator,
        *,
        max_workers: int = 8,
        log_sink: Optional[RecommendationLogSink] = None,
        scoring_config: Optional[ScoringConfig] = None,
        log_wait_seconds: Optional[float] = None
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.aggregator = aggregator
        self.max_workers = max_workers
        self.log_sink = log_sink
        self.scoring_config = scoring_config
        # None keeps the log write fully in the background
        self.log_wait_seconds = log_wait_seconds

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        aggregator: Optional[ScoreAggregator] = None,
        log_sink: Optional[RecommendationLogSink] = None,
        log_wait_seconds: Optional[float] = None
    ) -> 'BatchRecommender':
        return cls(
            aggregator or ScoreAggregator.from_config(config),
            max_workers=config.recommendation.max_workers,
            log_sink=log_sink,
            scoring_config=config.scoring,
            log_wait_seconds=log_wait_seconds,
        )

    def recommend(
        self,
        centers: Sequence[Center],
        user_location: Coordinate,
        profile: Optional[UserProfile] = None,
        severity_code: Union[str, SeverityCode, None] = None,
        limit: int = DEFAULT_LIMIT,
        now: Optional[datetime] = None,
        session_id: Optional[str] = None,
        user_id: Optional[int] = None
    ) -> List[RecommendationResult]:
        """
        Score, rank and truncate a batch of centers.

        Args:
            centers: Candidate centers
            user_location: Where the user is
            profile: Optional user profile
            severity_code: Optional assessment severity, selects the weight set
            limit: Maximum number of results
            now: Evaluation time for operating status
            session_id: Optional session id, only used for the recommendation log
            user_id: Optional user id, only used for the recommendation log

        Returns:
            Ranked results, at most `limit` long
        """
        validate_coordinate(user_location)
        if limit < 1:
            raise InvalidRequestError(f"limit must be at least 1, got {limit}")

        weights, weights_profile = select_weights(severity_code, self.scoring_config)
        if not centers:
            return []

        now = now or self.aggregator.now()
        scored: List[Tuple[Center, ScoreBreakdown]] = []
        workers = min(self.max_workers, len(centers))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="recommend") as pool:
            futures = {
                pool.submit(
                    self.aggregator.score_center,
                    center, user_location, profile, now, weights, weights_profile
                ): center
                for center in centers
            }

            for future in as_completed(futures):
                center = futures[future]
                try:
                    scored.append((center, future.result()))
                except ScoringError as e:
                    logger.warning(f"Dropping center {center.id}: {e}")
                except Exception:
                    logger.exception(f"Unexpected error scoring center {center.id}, dropping it")

        scored.sort(key=lambda item: (-item[1].total_score, item[0].id))

        results = [
            build_result(center, breakdown, rank)
            for rank, (center, breakdown) in enumerate(scored[:limit], start=1)
        ]

        logger.info(
            f"Scored {len(scored)}/{len(centers)} centers "
            f"(weights={weights_profile}), returning {len(results)}"
        )

        self.dispatch_log(results, user_location, session_id, user_id)
        return results

    def dispatch_log(
        self,
        results: Sequence[RecommendationResult],
        location: Coordinate,
        session_id: Optional[str],
        user_id: Optional[int]
    ) -> Optional[threading.Thread]:
        """
        Record results on a background thread. Never retries.

        Only blocks when `log_wait_seconds` is set, and then at most that long.
        """
        if self.log_sink is None or not results:
            return None
        if not session_id and user_id is None:
            return None

        thread = threading.Thread(
            target=self._record,
            args=(list(results), location, session_id, user_id),
            name="recommendation-log",
            daemon=True
        )
        thread.start()
        if self.log_wait_seconds is not None:
            thread.join(timeout=self.log_wait_seconds)
        return thread

    def _record(
        self,
        results: List[RecommendationResult],
        location: Coordinate,
        session_id: Optional[str],
        user_id: Optional[int]
    ) -> None:
        try:
            self.log_sink.record_recommendations(results, location, session_id, user_id)
            logger.debug(f"Recorded {len(results)} recommendations (session={session_id}, user={user_id})")
        except Exception as e:
            logger.error(f"Failed to record recommendations: {e}")
