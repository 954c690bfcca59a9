"""
Rewards service implementation.
"""

import logging
from typing import Optional

from modules.users.service import UserService
from shared.models import AuthenticatedUser
from .exceptions import InsufficientPointsError, RewardNotFoundError, RewardUnavailableError
from .interfaces import IRewardRepository
from .models import CreateRewardRequest, RedeemResponse, Reward, UserRedemption

logger = logging.getLogger(__name__)


class RewardService:
    """Reward catalogue and point redemptions."""

    def __init__(self, repository: IRewardRepository, users: UserService):
        self._repository = repository
        self._users = users

    async def list_rewards(self, company_id: Optional[int] = None) -> list[Reward]:
        return self._repository.list_rewards(company_id)

    async def create_reward(self, admin: AuthenticatedUser, request: CreateRewardRequest) -> Reward:
        reward = self._repository.create_reward(request, admin.company_id)
        logger.info(f"Admin {admin.id} created reward {reward.id}: {reward.title!r}")
        return reward

    async def redeem_reward(self, user_id: int, reward_id: int) -> RedeemResponse:
        """
        Spend points on a reward.

        Raises:
            RewardNotFoundError: If the reward does not exist
            InsufficientPointsError: If the user's balance is below the cost
            RewardUnavailableError: If the quantity limit is reached
        """
        reward = self._repository.get_reward(reward_id)
        if reward is None:
            raise RewardNotFoundError(reward_id)

        user = await self._users.get_user(user_id)
        if user.points_total < reward.cost_points:
            raise InsufficientPointsError(reward.cost_points - user.points_total, reward_id)

        if reward.quantity_limit is not None:
            if self._repository.count_redemptions(reward_id) >= reward.quantity_limit:
                raise RewardUnavailableError(reward_id, reward.quantity_limit)

        redemption = self._repository.create_redemption(user_id, reward_id)
        if reward.cost_points > 0:
            await self._users.award_points(user_id, f"Redeemed reward: {reward.title}", -reward.cost_points)

        logger.info(f"User {user_id} redeemed reward {reward_id} for {reward.cost_points} points")
        return RedeemResponse(redemption=redemption, reward=reward)

    async def get_user_redemptions(self, user_id: int) -> list[UserRedemption]:
        return self._repository.get_user_redemptions(user_id)
