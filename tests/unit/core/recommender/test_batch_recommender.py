"""
Tests for BatchRecommender.
"""
import random
from datetime import datetime
from unittest.mock import patch

import pytest

from core.exceptions import InvalidCoordinateError, InvalidRequestError
from core.recommender.batch import BatchRecommender
from core.scoring.aggregator import ScoreAggregator
from core.scoring.models import Coordinate, StaffCertification, UserProfile
from tests.fixtures.center_fixtures import SEOUL, make_center, offset, programs
from tests.mocks.collaborator_mocks import RecordingLogSink

MONDAY_MORNING = datetime(2026, 3, 2, 10, 0)


@pytest.fixture
def aggregator():
    agg = ScoreAggregator(max_workers=8, timeout_seconds=5.0)
    yield agg
    agg.shutdown()


@pytest.fixture
def centers():
    return [
        make_center(1, location=offset(SEOUL, 0)),
        make_center(2, location=offset(SEOUL, 2000), staff=[StaffCertification("임상심리사 1급", 1)]),
        make_center(3, location=offset(SEOUL, 4000), center_programs=programs(1)),
        make_center(4, location=offset(SEOUL, 6000), staff=[]),
        make_center(5, location=offset(SEOUL, 800), center_programs=programs(3)),
        make_center(6, location=offset(SEOUL, 9000), hours=[]),
    ]


class TestBatchRecommender:

    def test_sorted_descending_and_ranked(self, aggregator, centers):
        recommender = BatchRecommender(aggregator, max_workers=4)
        results = recommender.recommend(centers, SEOUL, limit=10, now=MONDAY_MORNING)

        totals = [r.total_score for r in results]
        assert totals == sorted(totals, reverse=True)
        assert [r.rank for r in results] == list(range(1, len(results) + 1))
        assert results[0].center_id == 1
        assert results[0].total_score == 96.0

    def test_order_is_independent_of_input_permutation(self, aggregator, centers):
        recommender = BatchRecommender(aggregator, max_workers=3)
        expected = [r.center_id for r in recommender.recommend(centers, SEOUL, limit=10, now=MONDAY_MORNING)]

        rng = random.Random(7)
        for _ in range(5):
            shuffled = list(centers)
            rng.shuffle(shuffled)
            got = [r.center_id for r in recommender.recommend(shuffled, SEOUL, limit=10, now=MONDAY_MORNING)]
            assert got == expected

    def test_ties_break_on_center_id(self, aggregator):
        twins = [make_center(9), make_center(3), make_center(5)]
        results = BatchRecommender(aggregator).recommend(twins, SEOUL, now=MONDAY_MORNING)
        assert [r.center_id for r in results] == [3, 5, 9]

    @pytest.mark.parametrize("limit", [1, 2, 5, 6, 20])
    def test_truncation_never_exceeds_limit(self, aggregator, centers, limit):
        results = BatchRecommender(aggregator).recommend(centers, SEOUL, limit=limit, now=MONDAY_MORNING)
        assert len(results) == min(limit, len(centers))

    def test_failed_center_is_dropped(self, aggregator, centers):
        original = aggregator.score_center

        def flaky(center, *args, **kwargs):
            if center.id == 1:
                raise RuntimeError("unexpected")
            return original(center, *args, **kwargs)

        with patch.object(aggregator, 'score_center', side_effect=flaky):
            results = BatchRecommender(aggregator).recommend(centers, SEOUL, limit=10, now=MONDAY_MORNING)

        assert 1 not in [r.center_id for r in results]
        assert len(results) == len(centers) - 1

    def test_center_with_all_modules_failing_is_dropped(self, aggregator):
        good = make_center(1)
        with patch('core.scoring.aggregator.calculate_specialty_score', side_effect=ValueError("x")):
            results = BatchRecommender(aggregator).recommend([good], SEOUL, now=MONDAY_MORNING)
        assert results[0].breakdown.failed_modules == ["specialty"]

        with patch('core.scoring.aggregator.calculate_distance_info', side_effect=ValueError("x")), \
                patch('core.scoring.aggregator.evaluate_operating_status', side_effect=ValueError("x")), \
                patch('core.scoring.aggregator.calculate_specialty_score', side_effect=ValueError("x")), \
                patch('core.scoring.aggregator.calculate_program_score', side_effect=ValueError("x")):
            results = BatchRecommender(aggregator).recommend([good], SEOUL, now=MONDAY_MORNING)
        assert results == []

    def test_result_contents(self, aggregator):
        center = make_center(1, location=offset(SEOUL, 500))
        result = BatchRecommender(aggregator).recommend([center], SEOUL, now=MONDAY_MORNING)[0]

        assert result.center_name == "Center 1"
        assert result.center.distance_meters == 500
        assert result.center.walk_time == "9 min"
        assert result.center.address == center.address
        assert len(result.reasons) <= 3
        assert "Open until 18:00" in result.reasons
        assert result.grade == "S"

    def test_severity_selects_assessment_weights(self, aggregator):
        results = BatchRecommender(aggregator).recommend(
            [make_center(1)], SEOUL, profile=None, severity_code="HIGH", now=MONDAY_MORNING
        )
        assert results[0].breakdown.weights_profile == "assessment"
        assert results[0].total_score == 94.0

    def test_profile_changes_program_score(self, aggregator):
        profile = UserProfile(preferred_category="개인상담")
        results = BatchRecommender(aggregator).recommend([make_center(1)], SEOUL, profile=profile, now=MONDAY_MORNING)
        assert results[0].scores.program == 100
        assert results[0].breakdown.details.program.mode == "matching"

    def test_empty_input(self, aggregator):
        assert BatchRecommender(aggregator).recommend([], SEOUL) == []

    def test_invalid_inputs_rejected(self, aggregator, centers):
        recommender = BatchRecommender(aggregator)
        with pytest.raises(InvalidCoordinateError):
            recommender.recommend(centers, Coordinate(latitude=100, longitude=0))
        with pytest.raises(InvalidRequestError):
            recommender.recommend(centers, SEOUL, limit=0)


class TestRecommendationLog:

    def test_logged_in_background_with_session(self, aggregator, centers):
        sink = RecordingLogSink()
        recommender = BatchRecommender(aggregator, log_sink=sink)

        results = recommender.recommend(centers, SEOUL, limit=3, now=MONDAY_MORNING, session_id="s-1")

        assert sink.called.wait(2)
        logged, location, session_id, user_id = sink.calls[0]
        assert [r.center_id for r in logged] == [r.center_id for r in results]
        assert location == SEOUL
        assert session_id == "s-1"
        assert user_id is None

    def test_not_logged_without_identity(self, aggregator, centers):
        sink = RecordingLogSink()
        recommender = BatchRecommender(aggregator, log_sink=sink)

        recommender.recommend(centers, SEOUL, now=MONDAY_MORNING)

        assert recommender.dispatch_log([], SEOUL, "s", None) is None
        assert not sink.called.wait(0.2)

    def test_sink_failure_does_not_reach_caller(self, aggregator, centers):
        sink = RecordingLogSink(fail=True)
        recommender = BatchRecommender(aggregator, log_sink=sink)

        results = recommender.recommend(centers, SEOUL, now=MONDAY_MORNING, user_id=42)

        assert results
        assert sink.called.wait(2)

    def test_dispatch_runs_on_daemon_thread(self, aggregator):
        sink = RecordingLogSink()
        recommender = BatchRecommender(aggregator, log_sink=sink)
        results = recommender.recommend([make_center(1)], SEOUL, now=MONDAY_MORNING)

        thread = recommender.dispatch_log(results, SEOUL, None, 7)
        thread.join(2)

        assert thread.daemon
        assert sink.calls[-1][3] == 7

    def test_log_wait_blocks_until_written(self, aggregator):
        sink = RecordingLogSink(delay=0.2)
        recommender = BatchRecommender(aggregator, log_sink=sink, log_wait_seconds=5)

        recommender.recommend([make_center(1)], SEOUL, now=MONDAY_MORNING, session_id="cli")

        assert len(sink.calls) == 1
        assert sink.calls[0][2] == "cli"

    def test_without_log_wait_returns_before_slow_write(self, aggregator):
        sink = RecordingLogSink(delay=0.5)
        recommender = BatchRecommender(aggregator, log_sink=sink)

        recommender.recommend([make_center(1)], SEOUL, now=MONDAY_MORNING, session_id="api")

        assert sink.calls == []
        assert sink.called.wait(2)
