"""
Challenges module.

Company or global challenges, participation and progress tracking.
"""

from .exceptions import (
    AlreadyParticipatingError,
    ChallengeAccessDeniedError,
    ChallengeNotFoundError,
)
from .interfaces import IChallengeRepository
from .models import (
    Challenge,
    ChallengeParticipant,
    CreateChallengeRequest,
    GoalType,
    UpdateChallengeRequest,
    UserChallenge,
)
from .progress import advance_challenge_progress, get_challenge_progress, get_days_remaining

__all__ = [
    "IChallengeRepository",
    "Challenge",
    "ChallengeParticipant",
    "CreateChallengeRequest",
    "GoalType",
    "UpdateChallengeRequest",
    "UserChallenge",
    "advance_challenge_progress",
    "get_challenge_progress",
    "get_days_remaining",
    "AlreadyParticipatingError",
    "ChallengeAccessDeniedError",
    "ChallengeNotFoundError",
]
