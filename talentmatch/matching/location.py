"""Location scoring (0-20)."""

from typing import Optional, Tuple

from .constants import LOCATION_MAX, LOCATION_NEUTRAL, LOCATION_REMOTE, REMOTE_KEYWORD


def match_location(
    candidate_location: Optional[str],
    job_location: Optional[str],
) -> Tuple[float, Optional[str]]:
    """
    Compare two free-text locations.

    Containment in either direction wins over the remote fallback, so
    "Remote" vs "Remote - US" is a location match, not a remote match.
    """
    if not candidate_location or not candidate_location.strip():
        return float(LOCATION_NEUTRAL), None
    if not job_location or not job_location.strip():
        return float(LOCATION_NEUTRAL), None

    cand = candidate_location.strip().lower()
    job = job_location.strip().lower()

    if cand in job or job in cand:
        return float(LOCATION_MAX), "Location match"
    if REMOTE_KEYWORD in job or REMOTE_KEYWORD in cand:
        return float(LOCATION_REMOTE), "Remote work possible"
    return 0.0, None
