"""
Centralized error handling for Job Match Scout.

Defines the exception taxonomy shared by the services and the utilities
used to log failures and aggregate isolated per-company errors.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


class ScoutError(Exception):
    """Base class for errors raised by the scout services."""


class MissingCredentialError(ScoutError):
    """Raised before any network call when no Gemini API key is configured."""


@dataclass
class AnalysisFailure:
    """
    Structured record of a failure isolated inside a batch.

    The batch keeps running; the failure is kept for reporting.
    """

    operation: str  # e.g., "analyze_company_jobs"
    subject: str  # e.g., company name
    message: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    exception_type: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "operation": self.operation,
            "subject": self.subject,
            "message": self.message,
            "timestamp": self.timestamp,
            "exception_type": self.exception_type,
        }


class ErrorCollector:
    """
    Collects failures during a batch run.

    Provides aggregation and summary capabilities for error tracking.
    """

    def __init__(self):
        self.errors: List[AnalysisFailure] = []

    def add(self, error: AnalysisFailure) -> None:
        """Add a failure to the collection."""
        self.errors.append(error)

    def add_error(
        self,
        operation: str,
        subject: str,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> None:
        """Convenience method to add a failure with parameters."""
        self.errors.append(
            AnalysisFailure(
                operation=operation,
                subject=subject,
                message=message,
                exception_type=type(exception).__name__ if exception else None,
            )
        )

    def has_errors(self) -> bool:
        return bool(self.errors)

    def get_error_messages(self) -> List[str]:
        return [f"{e.subject}: {e.message}" for e in self.errors]

    def clear(self) -> None:
        self.errors.clear()

    def summary(self) -> dict:
        """Get error summary statistics."""
        by_type: dict = {}
        for error in self.errors:
            key = error.exception_type or "unknown"
            by_type[key] = by_type.get(key, 0) + 1
        return {
            "total": len(self.errors),
            "by_exception_type": by_type,
            "subjects": [e.subject for e in self.errors],
        }


def log_on_exception(
    logger: logging.Logger,
    operation: str,
    level: int = logging.ERROR,
    include_traceback: bool = False,
):
    """
    Context manager for logging exceptions without swallowing them.

    Usage:
        with log_on_exception(logger, "Company search"):
            result = await client.generate(prompt)

    Args:
        logger: Logger instance to use
        operation: Operation description for the log message
        level: Log level (default: ERROR)
        include_traceback: Whether to include stack trace in log
    """

    class ExceptionLogger:
        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None:
                logger.log(
                    level,
                    f"[{operation}] Failed: {type(exc_val).__name__}: {exc_val}",
                    exc_info=include_traceback,
                )
            # Return False to not suppress the exception
            return False

    return ExceptionLogger()
