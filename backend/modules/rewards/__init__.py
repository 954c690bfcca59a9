"""
Rewards module.

Company or global rewards and point redemptions.
"""

from .exceptions import InsufficientPointsError, RewardNotFoundError, RewardUnavailableError
from .interfaces import IRewardRepository
from .models import CreateRewardRequest, RedeemResponse, Redemption, Reward, UserRedemption

__all__ = [
    "IRewardRepository",
    "CreateRewardRequest",
    "RedeemResponse",
    "Redemption",
    "Reward",
    "UserRedemption",
    "InsufficientPointsError",
    "RewardNotFoundError",
    "RewardUnavailableError",
]
