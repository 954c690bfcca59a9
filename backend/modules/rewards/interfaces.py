"""
Rewards module interfaces.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import CreateRewardRequest, Redemption, Reward, UserRedemption


@runtime_checkable
class IRewardRepository(Protocol):
    """Persistence for rewards and redemptions."""

    def create_reward(self, request: CreateRewardRequest, company_id: Optional[int]) -> Reward:
        ...

    def get_reward(self, reward_id: int) -> Optional[Reward]:
        ...

    def list_rewards(self, company_id: Optional[int] = None) -> list[Reward]:
        """A company's rewards plus global ones; every reward without a company."""
        ...

    def create_redemption(self, user_id: int, reward_id: int) -> Redemption:
        ...

    def count_redemptions(self, reward_id: int) -> int:
        ...

    def get_user_redemptions(self, user_id: int) -> list[UserRedemption]:
        """Most recent first."""
        ...
