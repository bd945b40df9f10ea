"""Human-readable reasons for a recommendation."""

from typing import List, Tuple

from core.scoring.models import ScoreBreakdown

MAX_REASONS = 3

DISTANCE_REASON_MIN = 90
OPERATING_REASON_MIN = 80
SPECIALTY_REASON_MIN = 70
PROGRAM_REASON_MIN = 70
WIDE_PROGRAM_RANGE_MIN = 5


def build_reasons(breakdown: ScoreBreakdown) -> List[str]:
    """
    Pick up to three reasons, strongest module first.

    Failed modules carry no detail and therefore never produce a reason.
    """
    scores = breakdown.scores
    details = breakdown.details
    candidates: List[Tuple[int, str]] = []

    if details.distance is not None and scores.distance >= DISTANCE_REASON_MIN:
        candidates.append((scores.distance, f"Close by ({details.distance.distance_text})"))

    if details.operating is not None and scores.operating >= OPERATING_REASON_MIN:
        candidates.append((scores.operating, details.operating.message))

    if (details.specialty is not None
            and scores.specialty >= SPECIALTY_REASON_MIN
            and details.specialty.top_certification):
        candidates.append((scores.specialty, f"{details.specialty.top_certification} on staff"))

    if details.program is not None and scores.program >= PROGRAM_REASON_MIN:
        program = details.program
        if program.matched_programs:
            candidates.append((scores.program, f"Matches {program.matched_programs[0].program_name}"))
        elif program.active_program_count >= WIDE_PROGRAM_RANGE_MIN:
            candidates.append((scores.program, f"Wide range of programs ({program.active_program_count})"))

    candidates.sort(key=lambda c: c[0], reverse=True)
    return [text for _, text in candidates[:MAX_REASONS]]
