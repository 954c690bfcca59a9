"""
Commutes service implementation.

Logging a commute is the main write path of the system. One call:
1. Normalizes the week to its Sunday and computes CO2 saved
2. Creates the (user, mode, week) log, or amends it while the week is open
3. Awards points for new logs only
4. Recomputes the user's streak
5. Hands new logs to challenge progress tracking (failures are logged)
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from modules.users.service import UserService
from .calculator import (
    build_commute_breakdown,
    local_now,
    calculate_co2_saved,
    calculate_commute_points,
    streak_from_logs,
    week_start_for,
)
from .exceptions import WeekClosedError
from .interfaces import IChallengeProgressTracker, ICommuteRepository
from .models import CommuteBreakdown, CommuteLog, LogCommuteRequest

logger = logging.getLogger(__name__)


class CommuteService:
    """Commute logging and the views derived from it."""

    def __init__(
        self,
        repository: ICommuteRepository,
        users: UserService,
        challenges: Optional[IChallengeProgressTracker] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self._repository = repository
        self._users = users
        self._challenges = challenges
        self._clock = clock

    def set_challenge_tracker(self, challenges: IChallengeProgressTracker) -> None:
        self._challenges = challenges

    def current_week_start(self) -> date:
        return week_start_for(self._clock()).date()

    async def log_commute(
        self,
        user_id: int,
        request: LogCommuteRequest,
    ) -> tuple[CommuteLog, bool]:
        """
        Record a week of commuting in one mode.

        Returns:
            The stored log and whether it was newly created

        Raises:
            WeekClosedError: If the log exists and its week has ended
            UserNotFoundError: If the user does not exist
        """
        await self._users.get_user(user_id)

        week_start = week_start_for(request.week_start).date()
        co2_saved = calculate_co2_saved(
            request.commute_type, request.distance_km, request.days_logged
        )

        existing = self._repository.find_log(user_id, request.commute_type, week_start)
        if existing is not None:
            if self._clock().date() >= week_start + timedelta(days=7):
                raise WeekClosedError(week_start, request.commute_type.value)

            log = self._repository.update_log(
                existing.id, request.days_logged, request.distance_km, co2_saved
            )
            created = False
            logger.info(
                f"Updated commute log {log.id} for user {user_id}: "
                f"{log.commute_type.value} x{log.days_logged}"
            )
        else:
            log = self._repository.create_log(
                user_id,
                week_start,
                request.commute_type,
                request.days_logged,
                request.distance_km,
                co2_saved,
            )
            created = True
            logger.info(
                f"Created commute log {log.id} for user {user_id}: "
                f"{log.commute_type.value} x{log.days_logged}, {co2_saved}kg CO2 saved"
            )

            points = calculate_commute_points(log.commute_type, log.days_logged)
            if points > 0:
                await self._users.award_points(
                    user_id, f"{log.commute_type.value} commute", points
                )

        await self.refresh_streak(user_id)

        if created and self._challenges is not None:
            try:
                await self._challenges.record_commute(user_id, log)
            except Exception:
                logger.exception(f"Challenge progress update failed for user {user_id}")

        return log, created

    async def refresh_streak(self, user_id: int) -> int:
        logs = self._repository.get_logs_by_user(user_id)
        streak = streak_from_logs(logs, self.current_week_start())
        await self._users.set_streak_count(user_id, streak)
        return streak

    async def get_logs(self, user_id: int) -> list[CommuteLog]:
        return self._repository.get_logs_by_user(user_id)

    async def get_current_week_logs(self, user_id: int) -> list[CommuteLog]:
        """Logs whose week starts on or after this week's Sunday."""
        week_start = self.current_week_start()
        return [
            log for log in self._repository.get_logs_by_user(user_id)
            if log.week_start >= week_start
        ]

    async def get_breakdown(self, user_id: int) -> CommuteBreakdown:
        return build_commute_breakdown(self._repository.get_logs_by_user(user_id))

    async def get_total_co2_saved(self, user_id: int) -> int:
        return sum(log.co2_saved_kg for log in self._repository.get_logs_by_user(user_id))

    async def get_streak(self, user_id: int) -> int:
        """Streak computed from the logs, not the stored counter."""
        logs = self._repository.get_logs_by_user(user_id)
        return streak_from_logs(logs, self.current_week_start())
