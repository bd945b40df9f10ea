#!/usr/bin/env python3
"""
Test suite for ScoreAggregator.
"""

import threading
import unittest
from unittest.mock import patch

from core.exceptions import AllModulesFailedError, ScoringTimeoutError
from core.scoring.aggregator import ScoreAggregator, calculate_total_score, get_score_grade
from core.scoring.models import StaffCertification
from core.scoring.weights import ASSESSMENT_WEIGHTS, DEFAULT_WEIGHTS
from tests.fixtures.center_fixtures import SEOUL, make_center, offset, programs
from datetime import datetime

MONDAY_MORNING = datetime(2026, 3, 2, 10, 0)


class TestScoreAggregator(unittest.TestCase):

    def setUp(self):
        self.aggregator = ScoreAggregator(max_workers=4, timeout_seconds=5.0)
        self.center = make_center()

    def tearDown(self):
        self.aggregator.shutdown()

    def test_top_center_reaches_maximum_under_default_weights(self):
        breakdown = self.aggregator.score_center(self.center, SEOUL, None, MONDAY_MORNING)

        self.assertEqual(breakdown.scores.distance, 100)
        self.assertEqual(breakdown.scores.operating, 100)
        self.assertEqual(breakdown.scores.specialty, 100)
        self.assertEqual(breakdown.scores.program, 80)
        self.assertEqual(breakdown.total_score, 96.0)
        self.assertTrue(breakdown.success)
        self.assertEqual(breakdown.failed_modules, [])
        self.assertEqual(breakdown.weights_profile, "default")

    def test_assessment_weights(self):
        breakdown = self.aggregator.score_center(
            self.center, SEOUL, None, MONDAY_MORNING, ASSESSMENT_WEIGHTS, "assessment"
        )
        # 100*0.25 + 100*0.25 + 100*0.20 + 80*0.30
        self.assertEqual(breakdown.total_score, 94.0)
        self.assertEqual(breakdown.weights_profile, "assessment")

    def test_one_failing_module_is_a_degraded_success(self):
        with patch('core.scoring.aggregator.calculate_specialty_score', side_effect=RuntimeError("boom")):
            breakdown = self.aggregator.score_center(self.center, SEOUL, None, MONDAY_MORNING)

        self.assertTrue(breakdown.success)
        self.assertEqual(breakdown.failed_modules, ["specialty"])
        self.assertEqual(breakdown.scores.specialty, 50)
        self.assertIsNone(breakdown.details.specialty)
        # 35 + 25 + 50*0.20 + 16
        self.assertEqual(breakdown.total_score, 86.0)

    def test_three_failing_modules_still_succeed(self):
        with patch('core.scoring.aggregator.calculate_distance_info', side_effect=ValueError("x")), \
                patch('core.scoring.aggregator.evaluate_operating_status', side_effect=ValueError("x")), \
                patch('core.scoring.aggregator.calculate_program_score', side_effect=ValueError("x")):
            breakdown = self.aggregator.score_center(self.center, SEOUL, None, MONDAY_MORNING)

        self.assertEqual(breakdown.failed_modules, ["distance", "operating", "program"])
        self.assertEqual(breakdown.scores.specialty, 100)

    def test_all_modules_failing_raises(self):
        with patch('core.scoring.aggregator.calculate_distance_info', side_effect=ValueError("x")), \
                patch('core.scoring.aggregator.evaluate_operating_status', side_effect=ValueError("x")), \
                patch('core.scoring.aggregator.calculate_specialty_score', side_effect=ValueError("x")), \
                patch('core.scoring.aggregator.calculate_program_score', side_effect=ValueError("x")):
            with self.assertRaises(AllModulesFailedError) as ctx:
                self.aggregator.score_center(self.center, SEOUL, None, MONDAY_MORNING)

        self.assertEqual(ctx.exception.center_id, self.center.id)

    def test_invalid_center_coordinate_only_fails_distance(self):
        from core.scoring.models import Coordinate
        center = make_center(location=Coordinate(latitude=123.0, longitude=0.0))

        breakdown = self.aggregator.score_center(center, SEOUL, None, MONDAY_MORNING)

        self.assertEqual(breakdown.failed_modules, ["distance"])
        self.assertEqual(breakdown.scores.distance, 50)

    def test_deadline_raises_timeout(self):
        release = threading.Event()

        def slow(*args, **kwargs):
            release.wait(2)
            raise RuntimeError("too late")

        aggregator = ScoreAggregator(max_workers=4, timeout_seconds=0.05)
        try:
            with patch('core.scoring.aggregator.calculate_program_score', side_effect=slow):
                with self.assertRaises(ScoringTimeoutError):
                    aggregator.score_center(self.center, SEOUL, None, MONDAY_MORNING)
        finally:
            release.set()
            aggregator.shutdown()

    def test_far_center_with_weak_staff(self):
        center = make_center(
            location=offset(SEOUL, 5000),
            staff=[StaffCertification("사회복지사 2급", 2)],
            center_programs=programs(2),
        )
        breakdown = self.aggregator.score_center(center, SEOUL, None, MONDAY_MORNING)

        # 5000m straight, 6500m by road
        self.assertEqual(breakdown.scores.distance, 35)
        self.assertEqual(breakdown.scores.specialty, 35)
        self.assertEqual(breakdown.scores.program, 40)


class TestTotals(unittest.TestCase):

    def test_total_is_rounded_to_two_decimals(self):
        scores = {'distance': 87, 'operating': 60, 'specialty': 55, 'program': 63}
        # 30.45 + 15 + 11 + 12.6
        self.assertEqual(calculate_total_score(scores, DEFAULT_WEIGHTS), 69.05)

    def test_grades(self):
        self.assertEqual(get_score_grade(96.0), "S")
        self.assertEqual(get_score_grade(80), "A")
        self.assertEqual(get_score_grade(79.99), "B")
        self.assertEqual(get_score_grade(60), "C")
        self.assertEqual(get_score_grade(12.5), "D")


if __name__ == '__main__':
    unittest.main()
