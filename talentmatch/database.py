"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for candidate, job and application storage.
"""

import json
import uuid
from datetime import datetime
from pathlib import Path
from sqlalchemy import (
    create_engine, Column, String, Integer, Text, DateTime, ForeignKey,
    UniqueConstraint, TypeDecorator,
)
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

PIPELINE_STAGES = ["screening", "shortlisted", "interview", "offer", "rejected", "hired"]
EMPLOYMENT_TYPES = ["full-time", "part-time", "contract", "internship"]
JOB_STATUSES = ["open", "closed"]


def _new_id() -> str:
    return str(uuid.uuid4())


class JSONType(TypeDecorator):
    """JSON column stored as text, so lists survive SQLite round trips."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return json.loads(value)


class Candidate(Base):
    """Candidate profile, usually drafted from a parsed resume."""

    __tablename__ = "candidates"

    id = Column(String, primary_key=True, default=_new_id)
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String)
    location = Column(String)
    skills = Column(JSONType, default=list)
    total_experience = Column(String)  # free text as extracted, e.g. "5+ years"
    relevant_experience = Column(String)
    education = Column(JSONType)
    employment_history = Column(JSONType)
    source = Column(String)
    notes = Column(Text)
    stage = Column(String, nullable=False, default="screening")
    tags = Column(JSONType, default=list)
    resume_file_name = Column(String)
    resume_file_path = Column(String)  # opaque object-store path
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


class Job(Base):
    """Job requisition."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, default=_new_id)
    title = Column(String, nullable=False)
    description = Column(Text)
    required_skills = Column(JSONType, default=list)
    min_experience = Column(Integer, nullable=False, default=0)
    max_experience = Column(Integer)  # NULL = no upper bound
    location = Column(String)
    employment_type = Column(String, default="full-time")
    status = Column(String, nullable=False, default="open")
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


class JobApplication(Base):
    """Link between a job and a candidate, holding the last match score."""

    __tablename__ = "job_applications"
    __table_args__ = (UniqueConstraint("job_id", "candidate_id", name="uq_job_candidate"),)

    id = Column(String, primary_key=True, default=_new_id)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    candidate_id = Column(String, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False)
    match_score = Column(Integer)
    status = Column(String, default="matched")
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
