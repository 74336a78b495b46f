"""
Match boundary.

Entry point for ranking candidates against one job. Validates the shape
of the request, scores every candidate and returns the ranked list.
The call is pure: it reads no storage and writes no logs.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Mapping, Optional

from .aggregator import rank_results, score_candidate
from .models import CandidateDescriptor, JobDescriptor, MatchResult


class InvalidInput(ValueError):
    """Raised when the job is missing or candidates is not a list."""

    def __init__(self, message: str = "Invalid request: job and candidates array required"):
        super().__init__(message)


def _coerce_job(job: Any) -> JobDescriptor:
    if isinstance(job, JobDescriptor):
        return job
    if isinstance(job, Mapping):
        return JobDescriptor.from_record(job)
    raise InvalidInput()


def run_match(
    job: Any,
    candidates: Any,
    strict_skills: bool = False,
    max_workers: Optional[int] = None,
) -> List[MatchResult]:
    """
    Rank candidates against a job.

    Args:
        job: JobDescriptor or job record (dict)
        candidates: List or tuple of CandidateDescriptor / candidate records
        strict_skills: Use exact skill matching instead of containment
        max_workers: Score candidates on a thread pool when greater than 1

    Returns:
        One MatchResult per candidate, highest score first. Ties keep
        their input order.

    Raises:
        InvalidInput: If job is missing or candidates is not a list/tuple
    """
    if job is None or not isinstance(candidates, (list, tuple)):
        raise InvalidInput()

    descriptor = _coerce_job(job)
    people = [CandidateDescriptor.from_record(c) for c in candidates]

    def _score(candidate: CandidateDescriptor) -> MatchResult:
        return score_candidate(descriptor, candidate, strict_skills=strict_skills)

    if max_workers and max_workers > 1 and len(people) > 1:
        # map() yields in submission order, so ranking stays stable
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            scored = list(executor.map(_score, people))
    else:
        scored = [_score(c) for c in people]

    return rank_results(scored)
