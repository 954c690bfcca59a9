"""
Challenge API endpoints.

Mounted under /api: /challenges for the catalogue and
/user/challenges for the caller's participations.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_challenge_service
from api.middleware.auth import get_current_user, require_admin, resolve_target_user
from shared.models import AuthenticatedUser

from .models import (
    Challenge,
    ChallengeParticipant,
    CreateChallengeRequest,
    UpdateChallengeRequest,
    UserChallenge,
)
from .service import ChallengeService

router = APIRouter()


@router.get("/challenges", response_model=list[Challenge])
async def list_challenges(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ChallengeService = Depends(get_challenge_service),
) -> list[Challenge]:
    """Challenges of the caller's company plus global ones."""
    return await service.list_challenges(user.company_id)


@router.post("/challenges", response_model=Challenge, status_code=201)
async def create_challenge(
    request: CreateChallengeRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ChallengeService = Depends(get_challenge_service),
) -> Challenge:
    return await service.create_challenge(admin, request)


@router.put("/challenges/{challenge_id}", response_model=Challenge)
async def update_challenge(
    challenge_id: int,
    request: UpdateChallengeRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ChallengeService = Depends(get_challenge_service),
) -> Challenge:
    return await service.update_challenge(admin, challenge_id, request)


@router.delete("/challenges/{challenge_id}", status_code=204)
async def delete_challenge(
    challenge_id: int,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ChallengeService = Depends(get_challenge_service),
) -> None:
    await service.delete_challenge(admin, challenge_id)


@router.post(
    "/challenges/{challenge_id}/join",
    response_model=ChallengeParticipant,
    status_code=201,
)
async def join_challenge(
    challenge_id: int,
    user_id: int = Depends(resolve_target_user),
    service: ChallengeService = Depends(get_challenge_service),
) -> ChallengeParticipant:
    """
    Join a challenge.

    Responds 404 for an unknown challenge and 400 when already joined.
    """
    return await service.join_challenge(user_id, challenge_id)


@router.get("/user/challenges", response_model=list[UserChallenge])
async def user_challenges(
    user_id: int = Depends(resolve_target_user),
    service: ChallengeService = Depends(get_challenge_service),
) -> list[UserChallenge]:
    return await service.get_user_challenges(user_id)
