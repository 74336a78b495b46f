"""
Typed records flowing through the match engine.

Records arrive as loose JSON-like dicts (stored rows use snake_case, the
wire payload uses camelCase). Defaults are applied here so the matchers
never see None where a list or a number is expected.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..normalize import clean_skills, clean_text, parse_optional_years, parse_years


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class JobDescriptor:
    id: Any = None
    title: str = ""
    required_skills: Tuple[str, ...] = ()
    min_experience: float = 0.0
    max_experience: Optional[float] = None
    location: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "JobDescriptor":
        return cls(
            id=_pick(record, "id"),
            title=clean_text(_pick(record, "title")) or "",
            required_skills=tuple(clean_skills(_pick(record, "required_skills", "requiredSkills"))),
            min_experience=parse_years(_pick(record, "min_experience", "minExperience")),
            max_experience=parse_optional_years(_pick(record, "max_experience", "maxExperience")),
            location=clean_text(_pick(record, "location")),
        )


@dataclass(frozen=True)
class CandidateDescriptor:
    id: Any = None
    full_name: str = ""
    skills: Tuple[str, ...] = ()
    total_experience: float = 0.0
    location: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "CandidateDescriptor":
        """Build a candidate; anything that is not a mapping becomes an empty candidate."""
        if isinstance(record, cls):
            return record
        if not isinstance(record, Mapping):
            return cls()
        return cls(
            id=_pick(record, "id"),
            full_name=clean_text(_pick(record, "full_name", "fullName")) or "",
            skills=tuple(clean_skills(_pick(record, "skills"))),
            total_experience=parse_years(_pick(record, "total_experience", "totalExperience")),
            location=clean_text(_pick(record, "location")),
        )


@dataclass(frozen=True)
class MatchResult:
    candidate_id: Any
    candidate_name: str
    match_score: int
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidateId": self.candidate_id,
            "candidateName": self.candidate_name,
            "matchScore": self.match_score,
            "reasons": list(self.reasons),
        }


def results_to_payload(results: List[MatchResult]) -> Dict[str, Any]:
    """Wrap ranked results in the response envelope returned to callers."""
    return {"success": True, "matches": [r.to_dict() for r in results]}
