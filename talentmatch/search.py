"""
Candidate search for the recruiter search screen.

Filters run over stored rows or plain dicts, so the same code serves the
CLI and tests without a database.
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .normalize import normalize_text, parse_years


def field_value(candidate: Any, name: str) -> Any:
    """Read a field from an ORM row or a dict."""
    if isinstance(candidate, dict):
        return candidate.get(name)
    return getattr(candidate, name, None)


def _matches_query(candidate: Any, query: str) -> bool:
    name = field_value(candidate, "full_name") or ""
    if query in name.lower():
        return True
    skills = field_value(candidate, "skills") or []
    if any(query in str(s).lower() for s in skills):
        return True
    for entry in field_value(candidate, "employment_history") or []:
        if not isinstance(entry, dict):
            continue
        company = str(entry.get("company") or "").lower()
        position = str(entry.get("position") or "").lower()
        if query in company or query in position:
            return True
    return False


def _has_any_skill(candidate: Any, wanted: Sequence[str]) -> bool:
    skills = {normalize_text(str(s)) for s in field_value(candidate, "skills") or []}
    return any(normalize_text(w) in skills for w in wanted)


def search_candidates(
    candidates: Iterable[Any],
    query: Optional[str] = None,
    experience_range: Tuple[float, Optional[float]] = (0, None),
    skills: Optional[Sequence[str]] = None,
) -> List[Any]:
    """
    Filter candidates by keyword, experience band and skills.

    Args:
        candidates: Candidate rows or dicts
        query: Case-insensitive keyword matched against name, skills and
            employment history (company/position)
        experience_range: Inclusive (min, max) years; max None = no upper bound
        skills: Keep candidates having any of these skills (exact, case-insensitive)

    Returns:
        Matching candidates in their original order
    """
    q = query.strip().lower() if query and query.strip() else None
    low, high = experience_range
    wanted = [s for s in (skills or []) if s and s.strip()]

    results = []
    for candidate in candidates:
        if q and not _matches_query(candidate, q):
            continue
        years = parse_years(field_value(candidate, "total_experience"))
        if years < (low or 0) or (high is not None and years > high):
            continue
        if wanted and not _has_any_skill(candidate, wanted):
            continue
        results.append(candidate)
    return results


def collect_skills(candidates: Iterable[Any]) -> List[str]:
    """Distinct skills across candidates, first spelling wins, sorted by name."""
    seen = {}
    for candidate in candidates:
        for skill in field_value(candidate, "skills") or []:
            text = str(skill).strip()
            if text and normalize_text(text) not in seen:
                seen[normalize_text(text)] = text
    return [seen[k] for k in sorted(seen)]
