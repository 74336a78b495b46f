"""Dashboard statistics over the candidate pool."""

from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Optional

from .database import PIPELINE_STAGES
from .normalize import normalize_text
from .search import field_value

IN_PIPELINE_STAGES = {"shortlisted", "interview", "offer"}
NEW_WINDOW_DAYS = 7


def _created_at(candidate: Any) -> Optional[datetime]:
    value = field_value(candidate, "created_at")
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def dashboard_stats(
    candidates: Iterable[Any],
    now: Optional[datetime] = None,
    top_n: int = 5,
) -> Dict[str, Any]:
    """
    Summarize the candidate pool for the dashboard.

    Returns:
        Dict with total_candidates, new_this_week, in_pipeline, hired,
        top_skills ([{skill, count}], count desc then name) and
        stage_breakdown (every stage, fixed order)
    """
    now = now or datetime.now()
    cutoff = now - timedelta(days=NEW_WINDOW_DAYS)

    total = 0
    new_this_week = 0
    stages: Counter = Counter()
    skill_counts: Counter = Counter()
    spelling: Dict[str, str] = {}

    for candidate in candidates:
        total += 1
        created = _created_at(candidate)
        if created is not None and created >= cutoff:
            new_this_week += 1
        stages[field_value(candidate, "stage") or "screening"] += 1

        counted = set()
        for skill in field_value(candidate, "skills") or []:
            text = str(skill).strip()
            key = normalize_text(text)
            if not text or key in counted:
                continue
            counted.add(key)
            skill_counts[key] += 1
            spelling.setdefault(key, text)

    ranked = sorted(skill_counts.items(), key=lambda kv: (-kv[1], kv[0]))[:top_n]

    return {
        "total_candidates": total,
        "new_this_week": new_this_week,
        "in_pipeline": sum(stages[s] for s in IN_PIPELINE_STAGES),
        "hired": stages["hired"],
        "top_skills": [{"skill": spelling[k], "count": c} for k, c in ranked],
        "stage_breakdown": [{"stage": s, "count": stages[s]} for s in PIPELINE_STAGES],
    }
