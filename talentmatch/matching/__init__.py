"""
Deterministic candidate/job match scoring.

Usage:
    from talentmatch.matching import run_match

    results = run_match(job, candidates)
    print(results[0].match_score)
"""

from .engine import InvalidInput, run_match
from .models import CandidateDescriptor, JobDescriptor, MatchResult, results_to_payload

__all__ = [
    "run_match",
    "InvalidInput",
    "JobDescriptor",
    "CandidateDescriptor",
    "MatchResult",
    "results_to_payload",
]
