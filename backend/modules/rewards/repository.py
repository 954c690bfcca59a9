"""
Reward repositories.

Tables:
- rewards
- redemptions
"""

from typing import Optional

from shared.repository import BaseRepository, InMemoryRepository, first_row
from .models import CreateRewardRequest, Redemption, Reward, UserRedemption


class InMemoryRewardRepository(InMemoryRepository[Reward]):
    """Rewards and redemptions kept in dicts keyed by id."""

    def __init__(self) -> None:
        super().__init__()
        self._rewards: dict[int, Reward] = {}
        self._redemptions: dict[int, Redemption] = {}

    def create_reward(self, request: CreateRewardRequest, company_id: Optional[int]) -> Reward:
        reward = Reward(
            id=self._next_id("rewards"),
            company_id=company_id,
            created_at=self._now(),
            **request.model_dump(),
        )
        self._rewards[reward.id] = reward
        return reward

    def get_reward(self, reward_id: int) -> Optional[Reward]:
        return self._rewards.get(reward_id)

    def list_rewards(self, company_id: Optional[int] = None) -> list[Reward]:
        return [
            r for r in self._rewards.values()
            if company_id is None or r.company_id in (company_id, None)
        ]

    def create_redemption(self, user_id: int, reward_id: int) -> Redemption:
        redemption = Redemption(
            id=self._next_id("redemptions"),
            user_id=user_id,
            reward_id=reward_id,
            redeemed_at=self._now(),
        )
        self._redemptions[redemption.id] = redemption
        return redemption

    def count_redemptions(self, reward_id: int) -> int:
        return sum(1 for r in self._redemptions.values() if r.reward_id == reward_id)

    def get_user_redemptions(self, user_id: int) -> list[UserRedemption]:
        redemptions = sorted(
            (r for r in self._redemptions.values() if r.user_id == user_id),
            key=lambda r: r.id,
            reverse=True,
        )
        return [
            UserRedemption(reward=self._rewards[r.reward_id], redemption=r)
            for r in redemptions
            if r.reward_id in self._rewards
        ]


class SupabaseRewardRepository(BaseRepository[Reward]):
    """Rewards in the `rewards` and `redemptions` tables."""

    def create_reward(self, request: CreateRewardRequest, company_id: Optional[int]) -> Reward:
        data = request.model_dump(mode="json")
        data["company_id"] = company_id
        result = self._db.table("rewards").insert(data).execute()
        return Reward.model_validate(result.data[0])

    def get_reward(self, reward_id: int) -> Optional[Reward]:
        result = self._db.table("rewards").select("*").eq("id", reward_id).execute()
        row = first_row(result.data)
        return Reward.model_validate(row) if row else None

    def list_rewards(self, company_id: Optional[int] = None) -> list[Reward]:
        query = self._db.table("rewards").select("*")
        if company_id is not None:
            query = query.or_(f"company_id.eq.{company_id},company_id.is.null")
        result = query.order("cost_points").execute()
        return [Reward.model_validate(row) for row in result.data]

    def create_redemption(self, user_id: int, reward_id: int) -> Redemption:
        result = self._db.table("redemptions").insert({
            "user_id": user_id,
            "reward_id": reward_id,
        }).execute()
        return Redemption.model_validate(result.data[0])

    def count_redemptions(self, reward_id: int) -> int:
        result = (
            self._db.table("redemptions")
            .select("id", count="exact")
            .eq("reward_id", reward_id)
            .execute()
        )
        return result.count or 0

    def get_user_redemptions(self, user_id: int) -> list[UserRedemption]:
        redemptions = (
            self._db.table("redemptions")
            .select("*")
            .eq("user_id", user_id)
            .order("redeemed_at", desc=True)
            .execute()
        )
        if not redemptions.data:
            return []

        reward_ids = list({row["reward_id"] for row in redemptions.data})
        rewards = self._db.table("rewards").select("*").in_("id", reward_ids).execute()
        by_id = {row["id"]: Reward.model_validate(row) for row in rewards.data}

        return [
            UserRedemption(reward=by_id[row["reward_id"]], redemption=Redemption.model_validate(row))
            for row in redemptions.data
            if row["reward_id"] in by_id
        ]
