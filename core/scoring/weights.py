"""Module weight sets and severity-based selection."""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from core.config_loader import ScoringConfig, WeightsConfig, WEIGHT_SUM_TOLERANCE
from core.exceptions import InvalidRequestError, InvalidWeightsError
from core.scoring.models import SeverityCode

DEFAULT_PROFILE = "default"
ASSESSMENT_PROFILE = "assessment"


@dataclass(frozen=True)
class ScoringWeights:
    distance: float
    operating: float
    specialty: float
    program: float

    def __post_init__(self):
        values = (self.distance, self.operating, self.specialty, self.program)
        if any(v < 0 for v in values):
            raise InvalidWeightsError(f"Weights must be non-negative: {values}")
        total = sum(values)
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise InvalidWeightsError(f"Weights must sum to 1.0, got {total:.4f}")

    @classmethod
    def from_config(cls, config: WeightsConfig) -> 'ScoringWeights':
        return cls(
            distance=config.distance,
            operating=config.operating,
            specialty=config.specialty,
            program=config.program,
        )

    def for_module(self, name: str) -> float:
        return getattr(self, name)


DEFAULT_WEIGHTS = ScoringWeights(distance=0.35, operating=0.25, specialty=0.20, program=0.20)
ASSESSMENT_WEIGHTS = ScoringWeights(distance=0.25, operating=0.25, specialty=0.20, program=0.30)


def parse_severity(value: Union[str, SeverityCode, None]) -> Optional[SeverityCode]:
    """Normalize a severity code; empty means no assessment."""
    if value is None or isinstance(value, SeverityCode):
        return value
    text = str(value).strip().upper()
    if not text:
        return None
    try:
        return SeverityCode(text)
    except ValueError:
        raise InvalidRequestError(f"Unknown severity code: {value}")


def select_weights(
    severity_code: Union[str, SeverityCode, None],
    config: Optional[ScoringConfig] = None
) -> Tuple[ScoringWeights, str]:
    """
    Pick the weight set for a request.

    Any assessment result (LOW, MID or HIGH) selects the assessment weights;
    the severity level itself does not change them further.

    Returns:
        (weights, profile name)
    """
    severity = parse_severity(severity_code)

    if severity is None:
        weights = ScoringWeights.from_config(config.default_weights) if config else DEFAULT_WEIGHTS
        return weights, DEFAULT_PROFILE

    weights = ScoringWeights.from_config(config.assessment_weights) if config else ASSESSMENT_WEIGHTS
    return weights, ASSESSMENT_PROFILE
