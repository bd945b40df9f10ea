"""
Tests for recommendation reasons.
"""
from core.recommender.reasons import build_reasons
from core.scoring.models import (
    DistanceInfo,
    ModuleScores,
    OperatingStatus,
    OperatingStatusResult,
    ProgramMatch,
    ProgramScoreInfo,
    ScoreBreakdown,
    ScoreDetails,
    SpecialtyInfo,
)


def _breakdown(distance=95, operating=100, specialty=80, program=75, matched=None, active=6, failed=()):
    details = ScoreDetails(
        distance=DistanceInfo(
            straight_distance_meters=300, adjusted_distance_meters=390, score=distance,
            distance_text="390m", walk_minutes=5, walk_time="5 min"
        ),
        operating=OperatingStatusResult(
            status=OperatingStatus.OPEN, score=operating, message="Open until 18:00", color="green"
        ),
        specialty=SpecialtyInfo(score=specialty, top_certification="정신건강전문요원 1급"),
        program=ProgramScoreInfo(
            score=program, active_program_count=active,
            mode="matching" if matched else "diversity",
            matched_programs=matched or [],
        ),
    )
    for name in failed:
        setattr(details, name, None)
    return ScoreBreakdown(
        scores=ModuleScores(distance=distance, operating=operating, specialty=specialty, program=program),
        details=details,
        total_score=0,
        failed_modules=list(failed),
    )


def test_strongest_three_in_score_order():
    reasons = build_reasons(_breakdown())
    assert reasons == ["Open until 18:00", "Close by (390m)", "정신건강전문요원 1급 on staff"]


def test_thresholds():
    reasons = build_reasons(_breakdown(distance=89, operating=60, specialty=69, program=69))
    assert reasons == []


def test_top_matched_program_is_named():
    matched = [ProgramMatch(program_name="마음 건강 상담", score=90)]
    reasons = build_reasons(_breakdown(distance=10, operating=60, specialty=10, program=90, matched=matched))
    assert reasons == ["Matches 마음 건강 상담"]


def test_wide_range_without_matches():
    reasons = build_reasons(_breakdown(distance=10, operating=60, specialty=10, program=80, active=7))
    assert reasons == ["Wide range of programs (7)"]


def test_failed_modules_give_no_reason():
    reasons = build_reasons(_breakdown(distance=50, operating=50, failed=("distance", "operating")))
    assert reasons == ["정신건강전문요원 1급 on staff", "Wide range of programs (6)"]
