"""
Commutes module exceptions.
"""

from datetime import date

from shared.exceptions import NotFoundError, ValidationError


class CommuteLogNotFoundError(NotFoundError):
    """Raised when a commute log id does not exist."""

    def __init__(self, log_id: int):
        super().__init__(
            f"Commute log not found: {log_id}",
            code="COMMUTE_LOG_NOT_FOUND",
            details={"log_id": log_id},
        )


class WeekClosedError(ValidationError):
    """Raised when amending a log for a week that has already ended."""

    def __init__(self, week_start: date, commute_type: str):
        super().__init__(
            "This week is closed and its commute log can no longer be changed",
            code="WEEK_CLOSED",
            details={"week_start": week_start.isoformat(), "commute_type": commute_type},
        )
