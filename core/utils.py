import hashlib
import json
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives.

    Python's built-in round() uses banker's rounding, which would turn a
    score of 62.5 into 62. Scores are always non-negative here.

    Args:
        value: Non-negative number to round

    Returns:
        Rounded integer
    """
    return int(math.floor(value + 0.5))


def round_to_cents(value: float) -> float:
    """Round to two decimal places, halves up."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class RequestFingerprinter:
    """
    Pure logic for creating deterministic fingerprints of request parameters.
    """

    @staticmethod
    def canonical_json(payload: Any) -> str:
        """Serialize with sorted keys and no whitespace so equal payloads hash equally."""
        return json.dumps(payload, sort_keys=True, separators=(',', ':'), ensure_ascii=False, default=str)

    @staticmethod
    def calculate(payload: Any, length: int = 16) -> str:
        """
        Create a short deterministic hash of a JSON-serializable payload.
        Formula: MD5(canonical_json(payload))[:length]
        """
        raw_string = RequestFingerprinter.canonical_json(payload)
        return hashlib.md5(raw_string.encode('utf-8')).hexdigest()[:length]
