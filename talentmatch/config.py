"""
Runtime settings.

Read from the environment (after load_env), overridable from the CLI.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_DB_PATH = "data/talentmatch.db"
DEFAULT_LOG_DIR = "logs"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(value: Optional[str], default: int, name: str) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Settings:
    db_path: Path = Path(DEFAULT_DB_PATH)
    strict_skills: bool = False
    max_workers: int = 1
    log_level: str = "INFO"
    log_dir: Path = Path(DEFAULT_LOG_DIR)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            db_path=Path(env.get("TALENTMATCH_DB_PATH") or DEFAULT_DB_PATH),
            strict_skills=_env_bool(env.get("TALENTMATCH_STRICT_SKILLS")),
            max_workers=max(1, _env_int(env.get("TALENTMATCH_MAX_WORKERS"), 1, "TALENTMATCH_MAX_WORKERS")),
            log_level=(env.get("TALENTMATCH_LOG_LEVEL") or "INFO").upper(),
            log_dir=Path(env.get("TALENTMATCH_LOG_DIR") or DEFAULT_LOG_DIR),
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "db_path" in changes:
            changes["db_path"] = Path(changes["db_path"])
        return replace(self, **changes)
