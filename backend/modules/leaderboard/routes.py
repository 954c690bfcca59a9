"""
Leaderboard and stats endpoints.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_leaderboard_service
from api.middleware.auth import get_current_user, resolve_target_user
from shared.models import AuthenticatedUser

from .models import LeaderboardEntry, UserStats
from .service import DEFAULT_LIMIT, LeaderboardService

router = APIRouter()


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def leaderboard(
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100, description="Number of entries"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> list[LeaderboardEntry]:
    """Top users of the caller's company by points."""
    return await service.get_leaderboard(user.company_id, limit)


@router.get("/user/stats", response_model=UserStats)
async def user_stats(
    user_id: int = Depends(resolve_target_user),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> UserStats:
    return await service.get_user_stats(user_id)
