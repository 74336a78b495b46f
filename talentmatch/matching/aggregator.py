"""
Score aggregation.

Combines the three sub-scores for one candidate and ranks a batch of
results. Ranking is a stable sort, so equal scores keep input order.
"""

import math
from typing import Iterable, List

from .constants import MAX_SCORE, MIN_SCORE
from .experience import match_experience
from .location import match_location
from .models import CandidateDescriptor, JobDescriptor, MatchResult
from .skills import match_skills


def round_score(total: float) -> int:
    """Round half up and clamp to 0-100."""
    return max(MIN_SCORE, min(MAX_SCORE, int(math.floor(total + 0.5))))


def score_candidate(
    job: JobDescriptor,
    candidate: CandidateDescriptor,
    strict_skills: bool = False,
) -> MatchResult:
    skills = match_skills(candidate.skills, job.required_skills, strict=strict_skills)
    exp_score, exp_reason = match_experience(
        candidate.total_experience, job.min_experience, job.max_experience
    )
    loc_score, loc_reason = match_location(candidate.location, job.location)

    # skills, experience, location
    reasons = [r for r in (skills.reason, exp_reason, loc_reason) if r]

    return MatchResult(
        candidate_id=candidate.id,
        candidate_name=candidate.full_name,
        match_score=round_score(skills.sub_score + exp_score + loc_score),
        reasons=reasons,
    )


def rank_results(results: Iterable[MatchResult]) -> List[MatchResult]:
    return sorted(results, key=lambda r: r.match_score, reverse=True)
