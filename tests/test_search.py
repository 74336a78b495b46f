"""
Tests for candidate search filters.
"""

from talentmatch.search import collect_skills, search_candidates


CANDIDATES = [
    {
        "id": "1",
        "full_name": "Maya Chen",
        "skills": ["React", "TypeScript"],
        "total_experience": "4",
        "employment_history": [{"company": "Acme Corp", "position": "Frontend Developer"}],
    },
    {
        "id": "2",
        "full_name": "Omar Haddad",
        "skills": ["Python", "SQL"],
        "total_experience": 9,
        "employment_history": [{"company": "DataWorks", "position": "Data Engineer"}],
    },
    {
        "id": "3",
        "full_name": "Lena Fischer",
        "skills": None,
        "total_experience": None,
        "employment_history": None,
    },
]


def _ids(results):
    return [c["id"] for c in results]


class TestSearchCandidates:
    """Keyword, experience and skill filters."""

    def test_no_filters_returns_everyone(self):
        assert _ids(search_candidates(CANDIDATES)) == ["1", "2", "3"]

    def test_keyword_matches_name(self):
        assert _ids(search_candidates(CANDIDATES, query="maya")) == ["1"]

    def test_keyword_matches_skill_substring(self):
        assert _ids(search_candidates(CANDIDATES, query="script")) == ["1"]

    def test_keyword_matches_employment_history(self):
        assert _ids(search_candidates(CANDIDATES, query="dataworks")) == ["2"]
        assert _ids(search_candidates(CANDIDATES, query="frontend dev")) == ["1"]

    def test_blank_keyword_ignored(self):
        assert len(search_candidates(CANDIDATES, query="   ")) == 3

    def test_experience_range_inclusive(self):
        assert _ids(search_candidates(CANDIDATES, experience_range=(4, 9))) == ["1", "2"]

    def test_experience_without_upper_bound(self):
        assert _ids(search_candidates(CANDIDATES, experience_range=(5, None))) == ["2"]

    def test_missing_experience_counts_as_zero(self):
        assert _ids(search_candidates(CANDIDATES, experience_range=(0, 0))) == ["3"]

    def test_any_selected_skill_matches(self):
        assert _ids(search_candidates(CANDIDATES, skills=["sql", "Rust"])) == ["2"]

    def test_skill_filter_is_exact(self):
        assert search_candidates(CANDIDATES, skills=["Type"]) == []

    def test_filters_combine(self):
        results = search_candidates(CANDIDATES, query="a", experience_range=(0, 5), skills=["React"])
        assert _ids(results) == ["1"]

    def test_works_on_rows(self, db_session, valid_candidate_record):
        from talentmatch.storage import create_candidate, list_candidates

        create_candidate(db_session, valid_candidate_record)
        results = search_candidates(list_candidates(db_session), query="acme")
        assert [c.full_name for c in results] == ["Maya Chen"]


class TestCollectSkills:
    """Distinct skills for filter pickers."""

    def test_collect_skills(self):
        candidates = CANDIDATES + [{"skills": ["react", " Go "]}]
        assert collect_skills(candidates) == ["Go", "Python", "React", "SQL", "TypeScript"]
