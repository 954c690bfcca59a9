"""
User profile endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_user_service
from api.middleware.auth import resolve_target_user

from .models import PointsTransaction, PublicUser, UserUpdate
from .service import UserService

router = APIRouter()


@router.get("/profile", response_model=PublicUser)
async def get_profile(
    user_id: int = Depends(resolve_target_user),
    users: UserService = Depends(get_user_service),
) -> PublicUser:
    user = await users.get_user(user_id)
    return user.to_public()


@router.patch("/profile", response_model=PublicUser)
async def update_profile(
    update: UserUpdate,
    user_id: int = Depends(resolve_target_user),
    users: UserService = Depends(get_user_service),
) -> PublicUser:
    """
    Update onboarding flags or the password.

    Omitted fields keep their stored value.
    """
    user = await users.update_user(user_id, update)
    return user.to_public()


@router.get("/points", response_model=list[PointsTransaction])
async def get_points_history(
    user_id: int = Depends(resolve_target_user),
    users: UserService = Depends(get_user_service),
) -> list[PointsTransaction]:
    """Points ledger, most recent first."""
    return await users.get_points_history(user_id)
