"""
Read queries.

Each read has a cache key built from its path and query parameters,
e.g. "/api/commutes/current?userId=1", and goes through the QueryCache
so that fresh data is reused and concurrent reads share one request.
"""

from typing import Any, Optional
from urllib.parse import urlencode

from modules.challenges.models import Challenge, UserChallenge
from modules.commutes.models import CommuteBreakdown, CommuteLog
from modules.leaderboard.models import LeaderboardEntry, UserStats
from modules.rewards.models import Reward, UserRedemption
from modules.users.models import PointsTransaction, PublicUser

from .api import TrakApi
from .cache import QueryCache, QueryState

COMMUTES = "/api/commutes"
CURRENT_COMMUTES = "/api/commutes/current"
COMMUTE_BREAKDOWN = "/api/commutes/breakdown"
USER_STATS = "/api/user/stats"
USER_PROFILE = "/api/user/profile"
USER_POINTS = "/api/user/points"
LEADERBOARD = "/api/leaderboard"
CHALLENGES = "/api/challenges"
USER_CHALLENGES = "/api/user/challenges"
REWARDS = "/api/rewards"
USER_REDEMPTIONS = "/api/user/redemptions"


def query_params(user_id: Optional[int] = None, **extra: Any) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if user_id is not None:
        params["userId"] = user_id
    params.update({k: v for k, v in extra.items() if v is not None})
    return params


def query_key(path: str, user_id: Optional[int] = None, **extra: Any) -> str:
    """Cache key for a read: the path plus its query string."""
    params = query_params(user_id, **extra)
    return f"{path}?{urlencode(params)}" if params else path


class TrakQueries:
    """Typed, cached reads against the Trak API."""

    def __init__(self, api: TrakApi, cache: QueryCache):
        self._api = api
        self._cache = cache

    @property
    def cache(self) -> QueryCache:
        return self._cache

    def _fetcher(self, path: str, model: Any, params: dict[str, Any]):
        async def fetch() -> Any:
            return await self._api.get(path, model, params or None)
        return fetch

    async def read(self, path: str, model: Any, user_id: Optional[int] = None, **extra: Any) -> Any:
        """Fresh data for a path, from cache when within the staleness window."""
        params = query_params(user_id, **extra)
        key = query_key(path, user_id, **extra)
        return await self._cache.fetch(key, self._fetcher(path, model, params))

    async def watch(
        self,
        path: str,
        model: Any,
        user_id: Optional[int] = None,
        **extra: Any,
    ) -> QueryState[Any]:
        """Stale-while-revalidate read of a path."""
        params = query_params(user_id, **extra)
        key = query_key(path, user_id, **extra)
        return await self._cache.query(key, self._fetcher(path, model, params))

    async def commute_logs(self, user_id: int) -> list[CommuteLog]:
        return await self.read(COMMUTES, list[CommuteLog], user_id)

    async def current_week_commutes(self, user_id: int) -> list[CommuteLog]:
        return await self.read(CURRENT_COMMUTES, list[CommuteLog], user_id)

    async def commute_breakdown(self, user_id: int) -> CommuteBreakdown:
        return await self.read(COMMUTE_BREAKDOWN, CommuteBreakdown, user_id)

    async def user_stats(self, user_id: int) -> UserStats:
        return await self.read(USER_STATS, UserStats, user_id)

    async def user_profile(self, user_id: int) -> PublicUser:
        return await self.read(USER_PROFILE, PublicUser, user_id)

    async def points_history(self, user_id: int) -> list[PointsTransaction]:
        return await self.read(USER_POINTS, list[PointsTransaction], user_id)

    async def leaderboard(self, user_id: int, limit: int = 10) -> list[LeaderboardEntry]:
        return await self.read(LEADERBOARD, list[LeaderboardEntry], user_id, limit=limit)

    async def challenges(self, user_id: int) -> list[Challenge]:
        return await self.read(CHALLENGES, list[Challenge], user_id)

    async def user_challenges(self, user_id: int) -> list[UserChallenge]:
        return await self.read(USER_CHALLENGES, list[UserChallenge], user_id)

    async def rewards(self, user_id: int) -> list[Reward]:
        return await self.read(REWARDS, list[Reward], user_id)

    async def user_redemptions(self, user_id: int) -> list[UserRedemption]:
        return await self.read(USER_REDEMPTIONS, list[UserRedemption], user_id)
