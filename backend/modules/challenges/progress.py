"""
Challenge progress and time helpers.
"""

import math
from datetime import datetime
from typing import Optional, Protocol

from modules.commutes.calculator import round_half_up
from modules.commutes.models import CommuteLog
from .models import Challenge, ChallengeParticipant, GoalType


class HasGoal(Protocol):
    goal_value: int


def get_challenge_progress(challenge: HasGoal, progress: float) -> float:
    """
    Completion percentage in [0, 100].

    A non-positive goal counts as already complete.
    """
    if challenge.goal_value <= 0:
        return 100.0
    return min(progress / challenge.goal_value * 100, 100.0)


def get_days_remaining(end_date: datetime, now: Optional[datetime] = None) -> int:
    """Whole days until `end_date`, rounded up and never negative."""
    if now is None:
        now = datetime.now(end_date.tzinfo)
    remaining = (end_date - now).total_seconds() / 86400
    return max(0, math.ceil(remaining))


def commute_contribution(challenge: Challenge, log: CommuteLog) -> int:
    """
    How much a logged commute moves a challenge forward.

    Typed challenges count matching logs by days or by kilometres
    (one-day distance times days). Untyped challenges count days of
    any sustainable mode.
    """
    if challenge.commute_type is not None:
        if log.commute_type != challenge.commute_type:
            return 0
        if challenge.goal_type == GoalType.KM:
            return round_half_up(log.distance_km * log.days_logged)
        return log.days_logged

    if challenge.goal_type == GoalType.DAYS and log.commute_type.is_sustainable:
        return log.days_logged
    return 0


def advance_challenge_progress(
    challenge: Challenge,
    participant: ChallengeParticipant,
    log: CommuteLog,
) -> Optional[ChallengeParticipant]:
    """
    The participant after applying `log`, or None when nothing changes.

    Progress is capped at the goal; reaching it marks completion.
    """
    if participant.completed:
        return None

    contribution = commute_contribution(challenge, log)
    if contribution <= 0:
        return None

    progress = min(participant.progress + contribution, challenge.goal_value)
    return participant.model_copy(update={
        "progress": progress,
        "completed": progress >= challenge.goal_value,
    })
