"""
Tests for the command-line interface.
"""

import json

import pytest

from talentmatch import __version__
from talentmatch.app import main
from talentmatch.database import get_session
from talentmatch.storage import list_applications, list_candidates, list_jobs


@pytest.fixture
def db_file(tmp_path):
    return tmp_path / "cli.db"


def _run(db_file, *argv):
    main(["--db", str(db_file), *argv])


def _stored_ids(db_file, lister):
    session = get_session(db_file)
    try:
        return [row.id for row in lister(session)]
    finally:
        session.close()


class TestMatchCommand:
    """talentmatch match --input payload.json"""

    def test_prints_ranked_payload(self, db_file, write_json, austin_job, full_match_candidate, capsys):
        weaker = dict(full_match_candidate, id="cand-2", full_name="Sam Ortiz", location="Lima")
        path = write_json("payload.json", {"job": austin_job, "candidates": [weaker, full_match_candidate]})

        _run(db_file, "match", "--input", str(path))

        out = json.loads(capsys.readouterr().out)
        assert out["success"] is True
        assert [m["candidateId"] for m in out["matches"]] == ["cand-1", "cand-2"]
        assert out["matches"][0]["matchScore"] == 100
        assert out["matches"][1]["matchScore"] == 80

    def test_invalid_payload_exits(self, db_file, write_json):
        path = write_json("payload.json", {"job": {"id": "j"}})
        with pytest.raises(SystemExit, match="job and candidates array required"):
            _run(db_file, "match", "--input", str(path))

    def test_missing_file_exits(self, db_file, tmp_path):
        with pytest.raises(SystemExit, match="Input file not found"):
            _run(db_file, "match", "--input", str(tmp_path / "nope.json"))

    def test_bad_json_exits(self, db_file, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SystemExit, match="Invalid JSON"):
            _run(db_file, "match", "--input", str(path))

    def test_strict_skills_flag(self, db_file, write_json, capsys):
        job = {"id": "j", "required_skills": ["Java"], "min_experience": 0}
        candidate = {"id": "c", "full_name": "Kai", "skills": ["JavaScript"], "total_experience": 1}
        path = write_json("payload.json", {"job": job, "candidates": [candidate]})

        _run(db_file, "match", "--input", str(path), "--strict-skills")

        out = json.loads(capsys.readouterr().out)
        assert out["matches"][0]["matchScore"] == 40


class TestRecordCommands:
    """add / update / delete / list for candidates and jobs."""

    def test_add_and_list_candidate(self, db_file, write_json, valid_candidate_record, capsys):
        _run(db_file, "add-candidate", "--input", str(write_json("c.json", valid_candidate_record)))
        assert "Created candidate:" in capsys.readouterr().out

        _run(db_file, "list-candidates")
        out = capsys.readouterr().out
        assert "Found 1 candidates" in out
        assert "Name: Maya Chen" in out

    def test_add_invalid_candidate_exits(self, db_file, write_json):
        path = write_json("c.json", {"full_name": "No Email"})
        with pytest.raises(SystemExit, match="Missing required field: email"):
            _run(db_file, "add-candidate", "--input", str(path))

    def test_update_candidate(self, db_file, write_json, valid_candidate_record, capsys):
        _run(db_file, "add-candidate", "--input", str(write_json("c.json", valid_candidate_record)))
        [candidate_id] = _stored_ids(db_file, list_candidates)
        capsys.readouterr()

        _run(db_file, "update-candidate", "--id", candidate_id,
             "--input", str(write_json("u.json", {"stage": "interview"})))
        assert "Status: updated (stage)" in capsys.readouterr().out

        _run(db_file, "update-candidate", "--id", candidate_id,
             "--input", str(write_json("u.json", {"stage": "interview"})))
        assert "Status: no-change" in capsys.readouterr().out

    def test_update_rejects_invalid_merge(self, db_file, write_json, valid_candidate_record):
        _run(db_file, "add-candidate", "--input", str(write_json("c.json", valid_candidate_record)))
        [candidate_id] = _stored_ids(db_file, list_candidates)

        with pytest.raises(SystemExit, match="stage"):
            _run(db_file, "update-candidate", "--id", candidate_id,
                 "--input", str(write_json("u.json", {"stage": "archived"})))

    def test_update_missing_record(self, db_file, write_json):
        with pytest.raises(SystemExit, match="Job not found: nope"):
            _run(db_file, "update-job", "--id", "nope", "--input", str(write_json("u.json", {"title": "X"})))

    def test_delete_job(self, db_file, write_json, valid_job_record, capsys):
        _run(db_file, "add-job", "--input", str(write_json("j.json", valid_job_record)))
        [job_id] = _stored_ids(db_file, list_jobs)

        _run(db_file, "delete-job", "--id", job_id)

        assert f"Deleted job: {job_id}" in capsys.readouterr().out
        assert _stored_ids(db_file, list_jobs) == []

    def test_list_empty_store(self, db_file, capsys):
        _run(db_file, "list-jobs")
        assert "No jobs in store." in capsys.readouterr().out


class TestValidateCommand:
    """talentmatch validate --kind ..."""

    def test_valid(self, db_file, write_json, valid_job_record, capsys):
        _run(db_file, "validate", "--kind", "job", "--input", str(write_json("j.json", valid_job_record)))
        assert capsys.readouterr().out.strip() == "Valid"

    def test_invalid_exits_with_code_2(self, db_file, write_json, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(db_file, "validate", "--kind", "candidate", "--input", str(write_json("c.json", {})))
        assert exc_info.value.code == 2
        assert "Missing required field: full_name" in capsys.readouterr().out


class TestMatchJobCommand:
    """talentmatch match-job against stored records."""

    def test_ranks_and_persists(self, db_file, write_json, valid_candidate_record, valid_job_record, capsys):
        _run(db_file, "add-candidate", "--input", str(write_json("c.json", valid_candidate_record)))
        _run(db_file, "add-job", "--input", str(write_json("j.json", valid_job_record)))
        [job_id] = _stored_ids(db_file, list_jobs)
        capsys.readouterr()

        _run(db_file, "match-job", "--job-id", job_id, "--persist")

        out = capsys.readouterr().out
        assert "#1 100  Maya Chen" in out
        assert "- Location match" in out
        session = get_session(db_file)
        try:
            assert [a.match_score for a in list_applications(session, job_id)] == [100]
        finally:
            session.close()

    @pytest.mark.parametrize("top", ["0", "-1", "two"])
    def test_top_must_be_positive(self, db_file, top, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(db_file, "match-job", "--job-id", "any", "--top", top)
        assert exc_info.value.code == 2
        assert "--top" in capsys.readouterr().err

    def test_top_limits_output(self, db_file, write_json, valid_candidate_record, valid_job_record, capsys):
        _run(db_file, "add-candidate", "--input", str(write_json("c.json", valid_candidate_record)))
        second = dict(valid_candidate_record, full_name="Sam Ortiz", email="sam@example.com", location="Lima")
        _run(db_file, "add-candidate", "--input", str(write_json("c2.json", second)))
        _run(db_file, "add-job", "--input", str(write_json("j.json", valid_job_record)))
        [job_id] = _stored_ids(db_file, list_jobs)
        capsys.readouterr()

        _run(db_file, "match-job", "--job-id", job_id, "--top", "1")

        out = capsys.readouterr().out
        assert "#1 100  Maya Chen" in out
        assert "Sam Ortiz" not in out

    def test_unknown_job_exits(self, db_file):
        with pytest.raises(SystemExit, match="Job not found"):
            _run(db_file, "match-job", "--job-id", "missing")


class TestSearchAndStats:
    """search and stats commands."""

    def test_search(self, db_file, write_json, valid_candidate_record, capsys):
        _run(db_file, "add-candidate", "--input", str(write_json("c.json", valid_candidate_record)))
        capsys.readouterr()

        _run(db_file, "search", "--query", "acme")
        assert "Found 1 matching candidates" in capsys.readouterr().out

        _run(db_file, "search", "--skills", "Rust,Go")
        assert "No matching candidates" in capsys.readouterr().out

    def test_stats(self, db_file, write_json, valid_candidate_record, capsys):
        _run(db_file, "add-candidate", "--input", str(write_json("c.json", valid_candidate_record)))
        capsys.readouterr()

        _run(db_file, "stats")

        stats = json.loads(capsys.readouterr().out)
        assert stats["total_candidates"] == 1
        assert stats["new_this_week"] == 1
        assert stats["stage_breakdown"]["screening"] == 1
        assert {"skill": "React", "count": 1} in stats["top_skills"]


class TestGlobalOptions:
    """Top-level flags."""

    def test_version(self, capsys):
        main(["--version"])
        assert capsys.readouterr().out.strip() == __version__

    def test_no_command_prints_help(self, db_file, capsys):
        _run(db_file)
        assert "usage: talentmatch" in capsys.readouterr().out

    def test_unknown_log_level(self, db_file, capsys):
        with pytest.raises(SystemExit, match="Unknown log level: LOUD"):
            main(["--db", str(db_file), "--log-level", "loud", "list-jobs"])

    def test_bad_worker_env(self, db_file, monkeypatch):
        monkeypatch.setenv("TALENTMATCH_MAX_WORKERS", "many")
        with pytest.raises(SystemExit, match="TALENTMATCH_MAX_WORKERS must be an integer"):
            _run(db_file, "list-jobs")
