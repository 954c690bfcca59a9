"""
Leaderboard and stats service.

Read-only views assembled from the users, commutes and challenges
services.
"""

from typing import Optional

from modules.challenges.service import ChallengeService
from modules.commutes.service import CommuteService
from modules.users.service import UserService
from .models import LeaderboardEntry, UserStats

DEFAULT_LIMIT = 10


class LeaderboardService:
    def __init__(
        self,
        users: UserService,
        commutes: CommuteService,
        challenges: ChallengeService,
    ):
        self._users = users
        self._commutes = commutes
        self._challenges = challenges

    async def get_leaderboard(
        self,
        company_id: Optional[int] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[LeaderboardEntry]:
        """Users of a company ordered by points, highest first."""
        users = await self._users.list_users(company_id, limit)
        return [LeaderboardEntry.model_validate(user.to_public().model_dump()) for user in users]

    async def get_user_stats(self, user_id: int) -> UserStats:
        user = await self._users.get_user(user_id)
        return UserStats(
            points=user.points_total,
            streak=await self._commutes.get_streak(user_id),
            co2_saved=await self._commutes.get_total_co2_saved(user_id),
            completed_challenges=await self._challenges.count_completed(user_id),
        )
