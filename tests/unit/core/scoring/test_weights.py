"""
Tests for weight sets and severity-based selection.
"""
import pytest

from core.config_loader import ScoringConfig, WeightsConfig
from core.exceptions import InvalidRequestError, InvalidWeightsError
from core.scoring.models import SeverityCode
from core.scoring.weights import (
    ASSESSMENT_WEIGHTS,
    DEFAULT_WEIGHTS,
    ScoringWeights,
    parse_severity,
    select_weights,
)


def _sum(weights: ScoringWeights) -> float:
    return weights.distance + weights.operating + weights.specialty + weights.program


@pytest.mark.parametrize("severity", [None, "LOW", "MID", "HIGH"])
def test_every_configuration_sums_to_one(severity):
    weights, _ = select_weights(severity)
    assert abs(_sum(weights) - 1.0) <= 1e-4


@pytest.mark.parametrize("severity", [None, SeverityCode.LOW, SeverityCode.MID, SeverityCode.HIGH])
def test_configured_sets_also_sum_to_one(severity):
    weights, _ = select_weights(severity, ScoringConfig())
    assert abs(_sum(weights) - 1.0) <= 1e-4


def test_no_assessment_uses_default_weights():
    weights, profile = select_weights(None)
    assert weights == DEFAULT_WEIGHTS
    assert profile == "default"
    assert (weights.distance, weights.operating, weights.specialty, weights.program) == (0.35, 0.25, 0.20, 0.20)


@pytest.mark.parametrize("severity", ["LOW", "MID", "HIGH", "mid"])
def test_any_severity_uses_assessment_weights(severity):
    weights, profile = select_weights(severity)
    assert weights == ASSESSMENT_WEIGHTS
    assert profile == "assessment"
    assert (weights.distance, weights.operating, weights.specialty, weights.program) == (0.25, 0.25, 0.20, 0.30)


def test_assessment_only_shifts_distance_and_program():
    assert ASSESSMENT_WEIGHTS.operating == DEFAULT_WEIGHTS.operating
    assert ASSESSMENT_WEIGHTS.specialty == DEFAULT_WEIGHTS.specialty
    assert ASSESSMENT_WEIGHTS.distance < DEFAULT_WEIGHTS.distance
    assert ASSESSMENT_WEIGHTS.program > DEFAULT_WEIGHTS.program


def test_weights_that_do_not_sum_to_one_are_rejected():
    with pytest.raises(InvalidWeightsError):
        ScoringWeights(distance=0.5, operating=0.5, specialty=0.5, program=0.5)


def test_negative_weight_is_rejected():
    with pytest.raises(InvalidWeightsError):
        ScoringWeights(distance=1.2, operating=-0.2, specialty=0.0, program=0.0)


def test_custom_config_weights_are_used():
    config = ScoringConfig(default_weights=WeightsConfig(distance=0.4, operating=0.2, specialty=0.2, program=0.2))
    weights, _ = select_weights(None, config)
    assert weights.distance == 0.4


def test_parse_severity():
    assert parse_severity(None) is None
    assert parse_severity("") is None
    assert parse_severity(" high ") == SeverityCode.HIGH
    with pytest.raises(InvalidRequestError):
        parse_severity("SEVERE")
