"""
Reward API endpoints.

Mounted under /api: /rewards for the catalogue and
/user/redemptions for the redemption history.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_reward_service
from api.middleware.auth import get_current_user, require_admin, resolve_target_user
from shared.models import AuthenticatedUser

from .models import CreateRewardRequest, RedeemResponse, Reward, UserRedemption
from .service import RewardService

router = APIRouter()


@router.get("/rewards", response_model=list[Reward])
async def list_rewards(
    user: AuthenticatedUser = Depends(get_current_user),
    service: RewardService = Depends(get_reward_service),
) -> list[Reward]:
    return await service.list_rewards(user.company_id)


@router.post("/rewards", response_model=Reward, status_code=201)
async def create_reward(
    request: CreateRewardRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: RewardService = Depends(get_reward_service),
) -> Reward:
    return await service.create_reward(admin, request)


@router.post("/rewards/{reward_id}/redeem", response_model=RedeemResponse, status_code=201)
async def redeem_reward(
    reward_id: int,
    user_id: int = Depends(resolve_target_user),
    service: RewardService = Depends(get_reward_service),
) -> RedeemResponse:
    """
    Redeem a reward with the user's points.

    Responds 400 with `pointsNeeded` when the balance is too low.
    """
    return await service.redeem_reward(user_id, reward_id)


@router.get("/user/redemptions", response_model=list[UserRedemption])
async def user_redemptions(
    user_id: int = Depends(resolve_target_user),
    service: RewardService = Depends(get_reward_service),
) -> list[UserRedemption]:
    return await service.get_user_redemptions(user_id)
