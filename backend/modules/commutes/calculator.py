"""
Commute calculators.

Pure functions turning raw commute data into derived values:
CO2 saved, points earned, week boundaries, streaks and the
per-mode breakdown.
"""

import math
from datetime import date, datetime, timedelta
from typing import Iterable

from .models import CommuteBreakdown, CommuteBreakdownItem, CommuteLog, CommuteType

# Average gasoline car, kg CO2 per km
BASELINE_EMISSION_KG_PER_KM = 0.19

EMISSION_FACTORS: dict[str, float] = {
    CommuteType.WALK.value: 0.0,
    CommuteType.CYCLE.value: 0.0,
    CommuteType.PUBLIC_TRANSPORT.value: 0.03,
    CommuteType.CARPOOL.value: 0.07,
    CommuteType.ELECTRIC_VEHICLE.value: 0.05,
    CommuteType.GAS_VEHICLE.value: 0.19,
    CommuteType.REMOTE_WORK.value: 0.0,
}

POINTS_PER_DAY: dict[str, int] = {
    CommuteType.WALK.value: 30,
    CommuteType.CYCLE.value: 25,
    CommuteType.PUBLIC_TRANSPORT.value: 20,
    CommuteType.CARPOOL.value: 15,
    CommuteType.ELECTRIC_VEHICLE.value: 10,
    CommuteType.REMOTE_WORK.value: 15,
    CommuteType.GAS_VEHICLE.value: 0,
}

CONSISTENCY_BONUS_POINTS = 25
CONSISTENCY_BONUS_MIN_DAYS = 3


def _mode_key(commute_type: CommuteType | str) -> str:
    return commute_type.value if isinstance(commute_type, CommuteType) else str(commute_type)


def round_half_up(value: float) -> int:
    """Round halves up (9.5 -> 10), unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def calculate_co2_saved(
    commute_type: CommuteType | str,
    distance_km: float,
    days_logged: int,
) -> int:
    """
    Kilograms of CO2 saved compared to driving an average gasoline car.

    saved = round(max(0, (0.19 - factor) * distance_km * days_logged))

    Unknown modes count as zero-emission. Gas vehicles always save 0.
    """
    factor = EMISSION_FACTORS.get(_mode_key(commute_type), 0.0)
    saved = (BASELINE_EMISSION_KG_PER_KM - factor) * distance_km * days_logged
    return max(0, round_half_up(saved))


def calculate_commute_points(commute_type: CommuteType | str, days_logged: int) -> int:
    """
    Points for one logged commute entry.

    Per-day points by mode, plus a consistency bonus for three or more
    days of the same sustainable mode.
    """
    mode = _mode_key(commute_type)
    points = POINTS_PER_DAY.get(mode, 0) * days_logged

    if days_logged >= CONSISTENCY_BONUS_MIN_DAYS and mode != CommuteType.GAS_VEHICLE.value:
        points += CONSISTENCY_BONUS_POINTS

    return points


def local_now() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


def week_start_for(moment: datetime) -> datetime:
    """Sunday 00:00 of the week containing `moment`, in the same timezone."""
    days_since_sunday = (moment.weekday() + 1) % 7
    start = moment - timedelta(days=days_since_sunday)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def is_qualifying(log: CommuteLog) -> bool:
    return log.commute_type.is_sustainable and log.days_logged > 0


def calculate_streak(week_starts: Iterable[date], current_week_start: date) -> int:
    """
    Count consecutive qualifying weeks.

    The run ends at the current week, or at the previous week when
    nothing has been logged yet this week.
    """
    weeks = set(week_starts)
    cursor = current_week_start
    if cursor not in weeks:
        cursor -= timedelta(days=7)

    streak = 0
    while cursor in weeks:
        streak += 1
        cursor -= timedelta(days=7)
    return streak


def streak_from_logs(logs: Iterable[CommuteLog], current_week_start: date) -> int:
    return calculate_streak(
        (log.week_start for log in logs if is_qualifying(log)),
        current_week_start,
    )


def build_commute_breakdown(logs: Iterable[CommuteLog]) -> CommuteBreakdown:
    """Days per commute mode with their share of all logged days."""
    days_by_type: dict[CommuteType, int] = {}
    for log in logs:
        days_by_type[log.commute_type] = days_by_type.get(log.commute_type, 0) + log.days_logged

    total_days = sum(days_by_type.values())
    items = [
        CommuteBreakdownItem(
            type=commute_type,
            days=days,
            percentage=round_half_up(days / total_days * 100) if total_days else 0,
        )
        for commute_type, days in days_by_type.items()
    ]
    items.sort(key=lambda item: item.days, reverse=True)
    return CommuteBreakdown(breakdown=items, total_days=total_days)
