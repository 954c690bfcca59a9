"""
Commutes module.

Weekly commute logging plus the calculators built on it:
CO2 saved, points, streaks and the per-mode breakdown.
"""

from .calculator import (
    build_commute_breakdown,
    calculate_co2_saved,
    calculate_commute_points,
    calculate_streak,
    week_start_for,
)
from .exceptions import CommuteLogNotFoundError, WeekClosedError
from .interfaces import IChallengeProgressTracker, ICommuteRepository
from .models import (
    CommuteBreakdown,
    CommuteBreakdownItem,
    CommuteLog,
    CommuteType,
    LogCommuteRequest,
)

__all__ = [
    # Calculators
    "build_commute_breakdown",
    "calculate_co2_saved",
    "calculate_commute_points",
    "calculate_streak",
    "week_start_for",
    # Interfaces
    "ICommuteRepository",
    "IChallengeProgressTracker",
    # Models
    "CommuteBreakdown",
    "CommuteBreakdownItem",
    "CommuteLog",
    "CommuteType",
    "LogCommuteRequest",
    # Exceptions
    "CommuteLogNotFoundError",
    "WeekClosedError",
]
