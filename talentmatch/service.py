"""
Job matching service.

Loads a job and the candidate pool from the record store, runs the match
engine and optionally stores each score on the job's applications. This
is the layer that logs and persists; the engine itself does neither.
"""

from typing import Any, Dict, List, Optional

from .config import Settings
from .logger import get_logger
from .matching import InvalidInput, MatchResult, run_match
from .storage import fetch_candidate_summaries, require_job, to_record, upsert_application


def match_payload(payload: Any, settings: Optional[Settings] = None) -> List[MatchResult]:
    """
    Rank a raw request payload of the form {"job": {...}, "candidates": [...]}.

    Raises:
        InvalidInput: If the payload lacks a job or a candidates list
    """
    settings = settings or Settings()
    logger = get_logger()
    if not isinstance(payload, dict):
        logger.record_invalid_request()
        raise InvalidInput()

    job = payload.get("job")
    candidates = payload.get("candidates")
    try:
        results = run_match(
            job,
            candidates,
            strict_skills=settings.strict_skills,
            max_workers=settings.max_workers,
        )
    except InvalidInput:
        logger.record_invalid_request()
        logger.warning("Rejected match request", has_job=job is not None,
                       candidates_type=type(candidates).__name__)
        raise

    _log_run(job.get("id") if isinstance(job, dict) else None,
             job.get("title") if isinstance(job, dict) else None, results)
    return results


def match_candidates_for_job(
    session,
    job_id: str,
    settings: Optional[Settings] = None,
    persist: bool = False,
    limit: Optional[int] = None,
) -> List[MatchResult]:
    """
    Rank every stored candidate against a stored job.

    Args:
        session: SQLAlchemy session
        job_id: Job to match against
        settings: Scoring settings (strict skills, worker count)
        persist: Store each score on the job/candidate application
        limit: Only return the top N results (all are scored and persisted)

    Returns:
        Ranked MatchResult list

    Raises:
        RecordNotFound: If the job does not exist
        ValueError: If limit is negative
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")
    settings = settings or Settings()
    logger = get_logger()
    job = require_job(session, job_id)
    candidates = fetch_candidate_summaries(session)

    results = run_match(
        to_record(job),
        candidates,
        strict_skills=settings.strict_skills,
        max_workers=settings.max_workers,
    )
    _log_run(job.id, job.title, results)

    if persist:
        outcome = _persist_scores(session, job.id, results)
        logger.info("Stored match scores", job_id=job.id, counts=outcome)

    if limit is not None:
        return results[:limit]
    return results


def _persist_scores(session, job_id: str, results: List[MatchResult]) -> Dict[str, int]:
    counts = {"new": 0, "updated": 0, "no-change": 0}
    for result in results:
        status = upsert_application(session, job_id, result.candidate_id, result.match_score)["status"]
        counts[status] += 1
    session.commit()
    return counts


def _log_run(job_id: Any, title: Optional[str], results: List[MatchResult]) -> None:
    logger = get_logger()
    top_score = results[0].match_score if results else None
    logger.record_match_run(job_id, len(results), top_score)
    logger.info(
        f"Matched {len(results)} candidates for job: {title or job_id}",
        job_id=job_id,
        top_score=top_score if top_score is not None else 0,
    )
