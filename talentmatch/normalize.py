import math
import re
from typing import Any, Iterable, List, Optional

_YEARS_RE = re.compile(r"-?\d+(?:\.\d+)?")


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def clean_text(value: Any) -> Optional[str]:
    """Return a stripped string, or None for missing/blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def clean_skills(skills: Any) -> List[str]:
    """Strip skills, drop blanks, keep original order and casing.

    A blank skill would be a substring of every other skill, so it never
    reaches the matchers.
    """
    if isinstance(skills, str):
        skills = [skills]
    if skills is None or isinstance(skills, (bytes, dict)) or not isinstance(skills, Iterable):
        return []
    cleaned = []
    for skill in skills:
        if skill is None:
            continue
        text = str(skill).strip()
        if text:
            cleaned.append(text)
    return cleaned


def dedupe_skills(skills: Iterable[str]) -> List[str]:
    """Deduplicate skills case-insensitively while preserving order."""
    seen = set()
    result = []
    for skill in skills:
        key = normalize_text(skill)
        if key not in seen:
            seen.add(key)
            result.append(skill)
    return result


def _to_years(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            years = float(value)
        except OverflowError:
            return None
    else:
        match = _YEARS_RE.search(str(value))
        if not match:
            return None
        years = float(match.group(0))
    if math.isnan(years) or math.isinf(years) or years < 0:
        return None
    return years


def parse_years(value: Any) -> float:
    """
    Coerce a stored experience value to a non-negative number of years.

    The store keeps experience as free text ("5", "3.5", "5+ years"), so
    the first number found wins. Anything unparseable, negative or out of
    float range counts as zero.
    """
    years = _to_years(value)
    return 0.0 if years is None else years


def parse_optional_years(value: Any) -> Optional[float]:
    """Like parse_years, but missing or invalid values stay None."""
    return _to_years(value)


def format_years(value: float) -> str:
    """Render a year count without a trailing .0 and at most two decimals."""
    rounded = round(float(value), 2)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")
