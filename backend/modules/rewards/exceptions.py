"""
Rewards module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class RewardNotFoundError(NotFoundError):
    """Raised when a reward does not exist."""

    def __init__(self, reward_id: int):
        super().__init__(
            "Reward not found",
            code="REWARD_NOT_FOUND",
            details={"reward_id": reward_id},
        )


class InsufficientPointsError(ValidationError):
    """
    Raised when a user cannot afford a reward.

    `pointsNeeded` is surfaced at the top level of the error body so
    clients can tell the user how far off they are.
    """

    def __init__(self, points_needed: int, reward_id: int):
        super().__init__(
            "Not enough points",
            code="INSUFFICIENT_POINTS",
            details={"pointsNeeded": points_needed, "reward_id": reward_id},
        )
        self.points_needed = points_needed


class RewardUnavailableError(ConflictError):
    """Raised when a reward has reached its quantity limit."""

    def __init__(self, reward_id: int, quantity_limit: int):
        super().__init__(
            "This reward is no longer available",
            code="REWARD_UNAVAILABLE",
            details={"reward_id": reward_id, "quantity_limit": quantity_limit},
        )
