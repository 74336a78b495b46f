"""Experience band scoring (0-30)."""

from typing import Optional, Tuple

from ..normalize import format_years
from .constants import CLOSE_DEFICIT_YEARS, EXPERIENCE_ABOVE_RANGE, EXPERIENCE_CLOSE, EXPERIENCE_MAX


def match_experience(
    candidate_years: float,
    min_years: float,
    max_years: Optional[float],
) -> Tuple[float, Optional[str]]:
    """
    Place a candidate in one of the experience bands.

    Bands, in order of precedence:
    - in range: at or above the minimum and not above the maximum (if any) -> 30
    - above range: past the maximum but still qualified -> 20
    - below minimum by at most 2 years -> 15
    - further below -> 0
    """
    meets_min = candidate_years >= min_years
    meets_max = max_years is None or candidate_years <= max_years

    if meets_min and meets_max:
        return float(EXPERIENCE_MAX), f"{format_years(candidate_years)} years experience meets requirements"
    if meets_min:
        return float(EXPERIENCE_ABOVE_RANGE), "Exceeds experience range but qualified"

    deficit = min_years - candidate_years
    if deficit <= CLOSE_DEFICIT_YEARS:
        return float(EXPERIENCE_CLOSE), f"{format_years(deficit)} years below minimum, but close"
    return 0.0, None
