"""
Commutes module interfaces.

ICommuteRepository is implemented by an in-memory and a Supabase
variant. IChallengeProgressTracker is what the commutes service needs
from the challenges module, without importing its implementation.
"""

from datetime import date
from typing import Protocol, Optional, runtime_checkable

from .models import CommuteLog, CommuteType


@runtime_checkable
class ICommuteRepository(Protocol):
    """Persistence for commute logs."""

    def create_log(
        self,
        user_id: int,
        week_start: date,
        commute_type: CommuteType,
        days_logged: int,
        distance_km: float,
        co2_saved_kg: int,
    ) -> CommuteLog:
        """Insert a log and return it with its id."""
        ...

    def get_logs_by_user(self, user_id: int) -> list[CommuteLog]:
        """All logs of a user, oldest week first."""
        ...

    def find_log(
        self,
        user_id: int,
        commute_type: CommuteType,
        week_start: date,
    ) -> Optional[CommuteLog]:
        """The log for (user, mode, week), if any."""
        ...

    def update_log(
        self,
        log_id: int,
        days_logged: int,
        distance_km: float,
        co2_saved_kg: int,
    ) -> CommuteLog:
        """
        Replace the counts of an existing log.

        Raises:
            CommuteLogNotFoundError: If the log does not exist
        """
        ...


@runtime_checkable
class IChallengeProgressTracker(Protocol):
    """Receives logged commutes to advance challenge progress."""

    async def record_commute(self, user_id: int, log: CommuteLog) -> None:
        ...
