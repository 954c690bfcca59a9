"""
Commute log repositories.

Both variants keep one aggregated row per (user, commute_type, week_start).
The service decides between create and update; the repositories only
store what they are given.
"""

from datetime import date
from typing import Optional

from shared.repository import BaseRepository, InMemoryRepository, first_row
from .exceptions import CommuteLogNotFoundError
from .models import CommuteLog, CommuteType


class InMemoryCommuteRepository(InMemoryRepository[CommuteLog]):
    """Commute logs kept in a dict keyed by log id."""

    def __init__(self) -> None:
        super().__init__()
        self._logs: dict[int, CommuteLog] = {}

    def create_log(
        self,
        user_id: int,
        week_start: date,
        commute_type: CommuteType,
        days_logged: int,
        distance_km: float,
        co2_saved_kg: int,
    ) -> CommuteLog:
        log = CommuteLog(
            id=self._next_id("commute_logs"),
            user_id=user_id,
            week_start=week_start,
            commute_type=commute_type,
            days_logged=days_logged,
            distance_km=distance_km,
            co2_saved_kg=co2_saved_kg,
            created_at=self._now(),
        )
        self._logs[log.id] = log
        return log

    def get_logs_by_user(self, user_id: int) -> list[CommuteLog]:
        logs = [log for log in self._logs.values() if log.user_id == user_id]
        return sorted(logs, key=lambda log: (log.week_start, log.id))

    def find_log(
        self,
        user_id: int,
        commute_type: CommuteType,
        week_start: date,
    ) -> Optional[CommuteLog]:
        return next(
            (
                log for log in self._logs.values()
                if log.user_id == user_id
                and log.commute_type == commute_type
                and log.week_start == week_start
            ),
            None,
        )

    def update_log(
        self,
        log_id: int,
        days_logged: int,
        distance_km: float,
        co2_saved_kg: int,
    ) -> CommuteLog:
        log = self._logs.get(log_id)
        if log is None:
            raise CommuteLogNotFoundError(log_id)

        updated = log.model_copy(update={
            "days_logged": days_logged,
            "distance_km": distance_km,
            "co2_saved_kg": co2_saved_kg,
        })
        self._logs[log_id] = updated
        return updated


class SupabaseCommuteRepository(BaseRepository[CommuteLog]):
    """Commute logs in the `commute_logs` table."""

    def create_log(
        self,
        user_id: int,
        week_start: date,
        commute_type: CommuteType,
        days_logged: int,
        distance_km: float,
        co2_saved_kg: int,
    ) -> CommuteLog:
        result = self._db.table("commute_logs").insert({
            "user_id": user_id,
            "week_start": week_start.isoformat(),
            "commute_type": commute_type.value,
            "days_logged": days_logged,
            "distance_km": distance_km,
            "co2_saved_kg": co2_saved_kg,
        }).execute()
        return CommuteLog.model_validate(result.data[0])

    def get_logs_by_user(self, user_id: int) -> list[CommuteLog]:
        result = (
            self._db.table("commute_logs")
            .select("*")
            .eq("user_id", user_id)
            .order("week_start")
            .execute()
        )
        return [CommuteLog.model_validate(row) for row in result.data]

    def find_log(
        self,
        user_id: int,
        commute_type: CommuteType,
        week_start: date,
    ) -> Optional[CommuteLog]:
        result = (
            self._db.table("commute_logs")
            .select("*")
            .eq("user_id", user_id)
            .eq("commute_type", commute_type.value)
            .eq("week_start", week_start.isoformat())
            .execute()
        )
        row = first_row(result.data)
        return CommuteLog.model_validate(row) if row else None

    def update_log(
        self,
        log_id: int,
        days_logged: int,
        distance_km: float,
        co2_saved_kg: int,
    ) -> CommuteLog:
        result = (
            self._db.table("commute_logs")
            .update({
                "days_logged": days_logged,
                "distance_km": distance_km,
                "co2_saved_kg": co2_saved_kg,
            })
            .eq("id", log_id)
            .execute()
        )
        row = first_row(result.data)
        if row is None:
            raise CommuteLogNotFoundError(log_id)
        return CommuteLog.model_validate(row)
