import re
from typing import Any, Dict, List

from .database import EMPLOYMENT_TYPES, JOB_STATUSES, PIPELINE_STAGES

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_YEARS_TEXT_RE = re.compile(r"-?\d+(?:\.\d+)?")

CANDIDATE_REQUIRED_STR_FIELDS = ["full_name", "email"]
CANDIDATE_OPTIONAL_STR_FIELDS = [
    "phone",
    "location",
    "source",
    "notes",
    "resume_file_name",
    "resume_file_path",
]
JOB_REQUIRED_STR_FIELDS = ["title"]
JOB_OPTIONAL_STR_FIELDS = ["description", "location"]


class RecordValidationError(ValueError):
    """Raised when a candidate or job record fails validation."""

    def __init__(self, kind: str, errors: List[str]):
        super().__init__(f"Invalid {kind}: " + "; ".join(errors))
        self.kind = kind
        self.errors = errors


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_str_list(v: Any) -> bool:
    return isinstance(v, list) and all(isinstance(x, str) for x in v)


def _is_non_negative_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def _check_strings(data: Dict[str, Any], required: List[str], optional: List[str], errors: List[str]) -> None:
    for f in required:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in optional:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")


def validate_candidate(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Candidate must be a JSON object"]
    errors: List[str] = []
    _check_strings(data, CANDIDATE_REQUIRED_STR_FIELDS, CANDIDATE_OPTIONAL_STR_FIELDS, errors)

    if _is_non_empty_str(data.get("email")) and not _EMAIL_RE.match(data["email"].strip()):
        errors.append("Field 'email' must be a valid email address")

    for f in ("skills", "tags"):
        if data.get(f) is not None and not _is_str_list(data[f]):
            errors.append(f"Field '{f}' must be a list of strings")

    stage = data.get("stage")
    if stage is not None and stage not in PIPELINE_STAGES:
        errors.append(f"Field 'stage' must be one of: {', '.join(PIPELINE_STAGES)}")

    exp = data.get("total_experience")
    if exp is not None:
        if isinstance(exp, bool) or not isinstance(exp, (int, float, str)):
            errors.append("Field 'total_experience' must be a number or text")
        elif isinstance(exp, (int, float)) and exp < 0:
            errors.append("Field 'total_experience' must not be negative")
        elif isinstance(exp, str) and exp.strip():
            match = _YEARS_TEXT_RE.search(exp)
            if not match:
                errors.append("Field 'total_experience' must contain a number of years")
            elif float(match.group(0)) < 0:
                errors.append("Field 'total_experience' must not be negative")

    return errors


def validate_job(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Job must be a JSON object"]
    errors: List[str] = []
    _check_strings(data, JOB_REQUIRED_STR_FIELDS, JOB_OPTIONAL_STR_FIELDS, errors)

    if data.get("required_skills") is not None and not _is_str_list(data["required_skills"]):
        errors.append("Field 'required_skills' must be a list of strings")

    min_exp = data.get("min_experience")
    max_exp = data.get("max_experience")
    if min_exp is not None and not _is_non_negative_int(min_exp):
        errors.append("Field 'min_experience' must be a non-negative integer")
    if max_exp is not None and not _is_non_negative_int(max_exp):
        errors.append("Field 'max_experience' must be a non-negative integer")
    if _is_non_negative_int(min_exp) and _is_non_negative_int(max_exp) and max_exp < min_exp:
        errors.append("Field 'max_experience' must be greater than or equal to 'min_experience'")

    employment_type = data.get("employment_type")
    if employment_type is not None and employment_type not in EMPLOYMENT_TYPES:
        errors.append(f"Field 'employment_type' must be one of: {', '.join(EMPLOYMENT_TYPES)}")

    status = data.get("status")
    if status is not None and status not in JOB_STATUSES:
        errors.append(f"Field 'status' must be one of: {', '.join(JOB_STATUSES)}")

    return errors


VALIDATORS = {
    "candidate": validate_candidate,
    "job": validate_job,
}


def ensure_valid(kind: str, data: Dict[str, Any]) -> None:
    """Raise RecordValidationError if the record does not validate."""
    errors = VALIDATORS[kind](data)
    if errors:
        raise RecordValidationError(kind, errors)
