"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from pathlib import Path
from typing import Dict, Any

from talentmatch.database import init_database, get_session
from talentmatch.logger import get_logger, reset_logger


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path, monkeypatch):
    """Route logs into the test's tmp dir and start each test with fresh metrics."""
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("TALENTMATCH_LOG_DIR", str(log_dir))
    reset_logger()
    get_logger(log_dir=log_dir, enable_console=False)
    yield
    reset_logger()


@pytest.fixture
def austin_job() -> Dict[str, Any]:
    """Job with a bounded experience band and a city location."""
    return {
        "id": "job-1",
        "title": "Frontend Engineer",
        "required_skills": ["React", "AWS"],
        "min_experience": 3,
        "max_experience": 6,
        "location": "Austin",
    }


@pytest.fixture
def full_match_candidate() -> Dict[str, Any]:
    """Candidate scoring 100 against austin_job."""
    return {
        "id": "cand-1",
        "full_name": "Maya Chen",
        "skills": ["React", "AWS", "Node.js"],
        "total_experience": 4,
        "location": "Austin, TX",
    }


@pytest.fixture
def valid_candidate_record() -> Dict[str, Any]:
    """Valid candidate record as stored."""
    return {
        "full_name": "Maya Chen",
        "email": "maya.chen@example.com",
        "phone": "+1 512 555 0100",
        "location": "Austin, TX",
        "skills": ["React", "AWS", "Node.js"],
        "total_experience": "4",
        "stage": "screening",
        "employment_history": [
            {"company": "Acme Corp", "position": "Frontend Developer"},
        ],
    }


@pytest.fixture
def valid_job_record() -> Dict[str, Any]:
    """Valid job record as stored."""
    return {
        "title": "Frontend Engineer",
        "description": "Build the recruiter dashboard.",
        "required_skills": ["React", "AWS"],
        "min_experience": 3,
        "max_experience": 6,
        "location": "Austin",
        "employment_type": "full-time",
    }


@pytest.fixture
def db_path(tmp_path) -> Path:
    path = tmp_path / "talentmatch.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Session on a fresh temporary database."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def write_json(tmp_path):
    """Write data to a JSON file in tmp_path and return its path."""
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path
    return _write
