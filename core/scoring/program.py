#!/usr/bin/env python3
"""
Program matching.

Without a user profile a center is scored on the breadth of its active
program list. With a profile every active program is matched on up to five
criteria and the center score is the mean program score.

A criterion whose profile field is unset, or that produced no match, is left
out of the weighted average entirely rather than counted as zero.
"""

import logging
from typing import Dict, List, Optional, Sequence

from core.scoring.constants import (
    ADULT_AGE_GROUPS,
    ADULT_TARGET_LABELS,
    AGE_ADULT_SCORE,
    AGE_EXACT_SCORE,
    AGE_PARTIAL_SCORE,
    CATEGORY_EXACT_SCORE,
    CATEGORY_PARTIAL_SCORE,
    CATEGORY_SYNONYM_SCORE,
    CATEGORY_SYNONYMS,
    MAX_MATCHED_PROGRAMS,
    ONLINE_MISMATCH_SCORE,
    PROGRAM_CRITERION_WEIGHTS,
    PROGRAM_DIVERSITY_SCORES,
    SYMPTOM_KEYWORDS,
)
from core.scoring.models import Program, ProgramMatch, ProgramScoreInfo, UserProfile
from core.utils import round_half_up

logger = logging.getLogger(__name__)


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def match_category(preferred: Optional[str], category: Optional[str]) -> int:
    wanted, actual = _norm(preferred), _norm(category)
    if not wanted or not actual:
        return 0
    if wanted == actual:
        return CATEGORY_EXACT_SCORE
    if wanted in actual or actual in wanted:
        return CATEGORY_PARTIAL_SCORE

    synonyms = CATEGORY_SYNONYMS.get(preferred.strip(), ())
    if any(s.lower() in actual for s in synonyms):
        return CATEGORY_SYNONYM_SCORE
    return 0


def match_age_group(age_group: Optional[str], target_group: Optional[str]) -> int:
    age, target = _norm(age_group), _norm(target_group)
    if not age or not target:
        return 0
    if age == target:
        return AGE_EXACT_SCORE
    if any(label in target for label in ADULT_TARGET_LABELS) and age in ADULT_AGE_GROUPS:
        return AGE_ADULT_SCORE
    if age in target or target in age:
        return AGE_PARTIAL_SCORE
    return 0


def symptom_keywords(symptom: str) -> Sequence[str]:
    """Keyword set for a symptom; unknown symptoms match on their own text."""
    return SYMPTOM_KEYWORDS.get(symptom.strip(), (symptom.strip(),))


def match_symptoms(symptoms: Sequence[str], program: Program) -> int:
    symptoms = [s for s in symptoms if s and s.strip()]
    if not symptoms:
        return 0

    text = " ".join(filter(None, [program.name, program.description, program.category])).lower()
    hits = 0
    for symptom in symptoms:
        if any(keyword.lower() in text for keyword in symptom_keywords(symptom)):
            hits += 1

    return round_half_up(hits / len(symptoms) * 100)


def match_online(prefer_online: Optional[bool], program: Program) -> Optional[int]:
    if prefer_online is None:
        return None
    return 100 if bool(program.is_online_available) == prefer_online else ONLINE_MISMATCH_SCORE


def match_free(prefer_free: Optional[bool], program: Program) -> Optional[int]:
    if prefer_free is None:
        return None
    if not prefer_free or program.is_free:
        return 100
    return 0


def match_program(profile: UserProfile, program: Program) -> ProgramMatch:
    """Score a single program against a profile."""
    criteria: Dict[str, Optional[int]] = {
        'category': match_category(profile.preferred_category, program.category) if profile.preferred_category else None,
        'age': match_age_group(profile.age_group, program.target_group) if profile.age_group else None,
        'symptom': match_symptoms(profile.symptoms, program) if profile.symptoms else None,
        'online': match_online(profile.prefer_online, program),
        'free': match_free(profile.prefer_free, program),
    }

    weighted_sum = 0
    weight_total = 0
    for name, value in criteria.items():
        if not value:
            continue
        weight = PROGRAM_CRITERION_WEIGHTS[name]
        weighted_sum += value * weight
        weight_total += weight

    score = round_half_up(weighted_sum / weight_total) if weight_total else 0

    reasons: List[str] = []
    if criteria['category'] in (CATEGORY_EXACT_SCORE, CATEGORY_PARTIAL_SCORE):
        reasons.append(f"Category match ({program.category})")
    elif criteria['category'] == CATEGORY_SYNONYM_SCORE:
        reasons.append(f"Related category ({program.category})")
    if criteria['age']:
        reasons.append(f"Suitable for {program.target_group}")
    if criteria['symptom']:
        reasons.append(f"Addresses your symptoms ({criteria['symptom']}%)")
    if profile.prefer_online and criteria['online'] == 100:
        reasons.append("Available online")
    if profile.prefer_free and program.is_free:
        reasons.append("Free of charge")
    if not reasons:
        reasons.append("Not enough matching information")

    return ProgramMatch(
        program_id=program.id,
        program_name=program.name,
        category=program.category,
        score=score,
        reasons=reasons,
    )


def diversity_score(active_count: int) -> int:
    for minimum, score in PROGRAM_DIVERSITY_SCORES:
        if active_count >= minimum:
            return score
    return 0


def calculate_program_score(
    programs: Sequence[Program],
    profile: Optional[UserProfile] = None
) -> ProgramScoreInfo:
    """
    Score a center's programs.

    Args:
        programs: All programs of the center; inactive ones are ignored
        profile: User profile, or None for the diversity fallback

    Returns:
        ProgramScoreInfo with the 0-100 score and the top matches
    """
    active = [p for p in programs if p.is_active]
    if not active:
        return ProgramScoreInfo(score=0, active_program_count=0, mode="none", reason="No active programs")

    if profile is None:
        score = diversity_score(len(active))
        return ProgramScoreInfo(
            score=score,
            active_program_count=len(active),
            mode="diversity",
            reason=f"{len(active)} active programs",
        )

    matches = [match_program(profile, program) for program in active]
    score = round_half_up(sum(m.score for m in matches) / len(matches))
    top = sorted(matches, key=lambda m: m.score, reverse=True)[:MAX_MATCHED_PROGRAMS]

    return ProgramScoreInfo(
        score=score,
        active_program_count=len(active),
        mode="matching",
        matched_programs=top,
        reason=f"Best match {top[0].program_name} ({top[0].score})",
    )
