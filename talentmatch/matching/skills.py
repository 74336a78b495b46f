"""
Skill matching.

A required skill counts as matched when it and some candidate skill
contain one another (case-insensitive). This over-matches on purpose:
"Java" matches "JavaScript" and "C" matches "C++". Strict mode only
accepts case-insensitive equality.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..normalize import normalize_text
from .constants import SKILLS_MAX, SKILLS_NEUTRAL


@dataclass(frozen=True)
class SkillMatch:
    matched_count: int
    sub_score: float
    reason: Optional[str] = None


def _is_match(required: str, candidate_skills: Sequence[str], strict: bool) -> bool:
    if strict:
        return required in candidate_skills
    return any(cs in required or required in cs for cs in candidate_skills)


def match_skills(
    candidate_skills: Sequence[str],
    required_skills: Sequence[str],
    strict: bool = False,
) -> SkillMatch:
    """
    Score a candidate's skills against a job's required skills (0-50).

    Args:
        candidate_skills: Skills listed on the candidate record
        required_skills: Skills the job requires
        strict: Require exact (case-insensitive) equality instead of containment

    Returns:
        SkillMatch with the matched count, the sub-score and an optional reason
    """
    if not required_skills:
        return SkillMatch(matched_count=0, sub_score=float(SKILLS_NEUTRAL))

    candidate_lower = [normalize_text(s) if strict else s.lower() for s in candidate_skills]
    matched = 0
    for skill in required_skills:
        required = normalize_text(skill) if strict else skill.lower()
        if _is_match(required, candidate_lower, strict):
            matched += 1

    sub_score = min(float(SKILLS_MAX), matched / len(required_skills) * SKILLS_MAX)
    reason = None
    if matched > 0:
        reason = f"Matches {matched}/{len(required_skills)} required skills"
    return SkillMatch(matched_count=matched, sub_score=sub_score, reason=reason)
