"""
Structured logging system for TalentMatch.

Provides centralized logging with console and file outputs, plus
metrics tracking for match runs and record-store activity.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for match runs and record changes.
    """

    def __init__(
        self,
        name: str = "talentmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        # Metrics tracking
        self.metrics = {
            "match_runs": 0,
            "candidates_scored": 0,
            "invalid_requests": 0,
            "records_created": {},
            "records_updated": {},
            "records_deleted": {},
            "top_score_by_job": {},
        }

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"talentmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_match_run(self, job_id: Any, candidates_scored: int, top_score: Optional[int]):
        """Record one completed match run."""
        self.metrics["match_runs"] += 1
        self.metrics["candidates_scored"] += candidates_scored
        if top_score is not None:
            self.metrics["top_score_by_job"][str(job_id)] = top_score

    def record_invalid_request(self):
        """Increment rejected match request counter."""
        self.metrics["invalid_requests"] += 1

    def record_change(self, kind: str, action: str):
        """Record a created/updated/deleted record of the given kind."""
        bucket = self.metrics[f"records_{action}"]
        bucket[kind] = bucket.get(kind, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        runs = metrics_copy["match_runs"]
        metrics_copy["avg_candidates_per_run"] = (
            round(metrics_copy["candidates_scored"] / runs, 1) if runs > 0 else 0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Session Metrics ===")
        self.info(f"Match runs: {metrics['match_runs']} "
                  f"({metrics['candidates_scored']} candidates scored, "
                  f"{metrics['avg_candidates_per_run']} per run)")
        self.info(f"Invalid requests: {metrics['invalid_requests']}")

        for action in ("created", "updated", "deleted"):
            counts = metrics[f"records_{action}"]
            if counts:
                summary = ", ".join(f"{kind}={count}" for kind, count in counts.items())
                self.info(f"Records {action}: {summary}")

        if metrics["top_score_by_job"]:
            self.info("Top score by job:")
            for job_id, score in metrics["top_score_by_job"].items():
                self.info(f"  {job_id}: {score}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "talentmatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
