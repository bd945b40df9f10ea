#!/usr/bin/env python3
"""
Staff specialty scoring.

A center is as good as its best-qualified staff member: the center score is
the maximum per-label certification score, not an average.
"""

import logging
from typing import Sequence

from core.scoring.constants import (
    CERTIFICATION_GRADES,
    CERTIFICATION_KEYWORDS,
    CERTIFICATION_SCORES,
    DEFAULT_CERTIFICATION_SCORE,
)
from core.scoring.models import SpecialtyInfo, StaffCertification

logger = logging.getLogger(__name__)


def get_certification_score(label) -> int:
    """
    Score a free-text certification label.

    Exact lookup first, then the ordered keyword fallback, then the default.
    """
    if not isinstance(label, str) or not label.strip():
        return DEFAULT_CERTIFICATION_SCORE

    key = label.strip()
    score = CERTIFICATION_SCORES.get(key)
    if score is None:
        score = CERTIFICATION_SCORES.get(key.lower())
    if score is not None:
        return score

    lowered = key.lower()
    for keyword, keyword_score in CERTIFICATION_KEYWORDS:
        if keyword.lower() in lowered:
            return keyword_score

    return DEFAULT_CERTIFICATION_SCORE


def get_certification_grade(score: int) -> str:
    for minimum, grade in CERTIFICATION_GRADES:
        if score >= minimum:
            return grade
    return 'D'


def calculate_specialty_score(staff: Sequence[StaffCertification]) -> SpecialtyInfo:
    """
    Score a center's staff list.

    Returns:
        SpecialtyInfo with the best label's score, the label itself, total
        headcount and the headcount of staff whose label beat the default.
    """
    if not staff:
        return SpecialtyInfo(score=0, grade=get_certification_grade(0), reason="No staff information")

    top_label = None
    top_score = -1
    total = 0
    certified = 0

    for entry in staff:
        headcount = max(0, entry.headcount or 0)
        score = get_certification_score(entry.label)
        total += headcount
        if score > DEFAULT_CERTIFICATION_SCORE:
            certified += headcount
        # Strictly greater keeps the first label on ties
        if score > top_score:
            top_score = score
            top_label = entry.label

    reason = f"Top certification {top_label} ({certified} certified staff)"

    return SpecialtyInfo(
        score=top_score,
        top_certification=top_label,
        top_certification_score=top_score,
        total_staff_count=total,
        certified_staff_count=certified,
        grade=get_certification_grade(top_score),
        reason=reason,
    )
