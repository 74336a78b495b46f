"""
Record store repositories.

CRUD for candidates, jobs and job applications on top of a SQLAlchemy
session. Repositories do not validate or score; callers run
schema.ensure_valid first and hand results to the match engine.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from .database import Candidate, Job, JobApplication

CANDIDATE_FIELDS = [
    "full_name", "email", "phone", "location", "skills", "total_experience",
    "relevant_experience", "education", "employment_history", "source",
    "notes", "stage", "tags", "resume_file_name", "resume_file_path",
]
JOB_FIELDS = [
    "title", "description", "required_skills", "min_experience",
    "max_experience", "location", "employment_type", "status",
]
_TEXT_NUMBER_FIELDS = {"total_experience", "relevant_experience"}


class RecordNotFound(LookupError):
    """Raised when a record id does not exist."""

    def __init__(self, kind: str, record_id: Any):
        super().__init__(f"{kind.capitalize()} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


def diff_dict(old: Dict[str, Any], new: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    changed = {}
    keys = set(old.keys()) | set(new.keys())
    for k in keys:
        ov = old.get(k)
        nv = new.get(k)
        if ov != nv:
            changed[k] = {"old": ov, "new": nv}
    return changed


def _pick_fields(data: Dict[str, Any], fields: List[str]) -> Dict[str, Any]:
    values = {k: data[k] for k in fields if k in data}
    for k in _TEXT_NUMBER_FIELDS & values.keys():
        if values[k] is not None:
            values[k] = str(values[k])
    return values


def to_record(row) -> Dict[str, Any]:
    """Serialize an ORM row to a plain dict (datetimes as ISO strings)."""
    record = {}
    for column in row.__table__.columns:
        value = getattr(row, column.name)
        if isinstance(value, datetime):
            value = value.isoformat()
        record[column.name] = value
    return record


def _snapshot(row, fields: List[str]) -> Dict[str, Any]:
    return {k: getattr(row, k) for k in fields}


# Candidates

def create_candidate(session, data: Dict[str, Any]) -> Candidate:
    values = _pick_fields(data, CANDIDATE_FIELDS)
    if data.get("id"):
        values["id"] = str(data["id"])
    candidate = Candidate(**values)
    session.add(candidate)
    session.commit()
    return candidate


def get_candidate(session, candidate_id: str) -> Optional[Candidate]:
    return session.get(Candidate, candidate_id)


def require_candidate(session, candidate_id: str) -> Candidate:
    candidate = get_candidate(session, candidate_id)
    if candidate is None:
        raise RecordNotFound("candidate", candidate_id)
    return candidate


def update_candidate(session, candidate_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
    """Apply updates and return the changed fields ({} means no change)."""
    candidate = require_candidate(session, candidate_id)
    return _apply_updates(session, candidate, updates, CANDIDATE_FIELDS)


def delete_candidate(session, candidate_id: str) -> None:
    candidate = require_candidate(session, candidate_id)
    session.query(JobApplication).filter_by(candidate_id=candidate_id).delete()
    session.delete(candidate)
    session.commit()


def list_candidates(session) -> List[Candidate]:
    """All candidates, newest first."""
    return session.query(Candidate).order_by(Candidate.created_at.desc()).all()


def fetch_candidate_summaries(session) -> List[Dict[str, Any]]:
    """Projection used to feed the match engine."""
    rows = session.query(
        Candidate.id,
        Candidate.full_name,
        Candidate.skills,
        Candidate.total_experience,
        Candidate.location,
    ).order_by(Candidate.created_at.desc()).all()
    return [
        {
            "id": row.id,
            "full_name": row.full_name,
            "skills": row.skills or [],
            "total_experience": row.total_experience,
            "location": row.location,
        }
        for row in rows
    ]


# Jobs

def create_job(session, data: Dict[str, Any]) -> Job:
    values = _pick_fields(data, JOB_FIELDS)
    if data.get("id"):
        values["id"] = str(data["id"])
    job = Job(**values)
    session.add(job)
    session.commit()
    return job


def get_job(session, job_id: str) -> Optional[Job]:
    return session.get(Job, job_id)


def require_job(session, job_id: str) -> Job:
    job = get_job(session, job_id)
    if job is None:
        raise RecordNotFound("job", job_id)
    return job


def update_job(session, job_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
    """Apply updates and return the changed fields ({} means no change)."""
    job = require_job(session, job_id)
    return _apply_updates(session, job, updates, JOB_FIELDS)


def delete_job(session, job_id: str) -> None:
    job = require_job(session, job_id)
    session.query(JobApplication).filter_by(job_id=job_id).delete()
    session.delete(job)
    session.commit()


def list_jobs(session) -> List[Job]:
    """All jobs, newest first."""
    return session.query(Job).order_by(Job.created_at.desc()).all()


# Applications

def upsert_application(session, job_id: str, candidate_id: str, match_score: int) -> Dict[str, Any]:
    """Store the latest match score for a job/candidate pair. Caller commits."""
    application = (
        session.query(JobApplication)
        .filter_by(job_id=job_id, candidate_id=candidate_id)
        .one_or_none()
    )
    if application is None:
        session.add(JobApplication(job_id=job_id, candidate_id=candidate_id, match_score=match_score))
        return {"status": "new"}
    if application.match_score != match_score:
        application.match_score = match_score
        return {"status": "updated"}
    return {"status": "no-change"}


def list_applications(session, job_id: str) -> List[JobApplication]:
    """Applications for a job, best score first."""
    return (
        session.query(JobApplication)
        .filter_by(job_id=job_id)
        .order_by(JobApplication.match_score.desc())
        .all()
    )


def _apply_updates(session, row, updates: Dict[str, Any], fields: List[str]) -> Dict[str, Any]:
    values = _pick_fields(updates, fields)
    before = _snapshot(row, list(values.keys()))
    changed = diff_dict(before, values)
    if not changed:
        return {}
    for key, change in changed.items():
        setattr(row, key, change["new"])
    session.commit()
    return changed
