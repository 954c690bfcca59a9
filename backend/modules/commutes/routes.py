"""
Commute API endpoints.
"""

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_commute_service
from api.middleware.auth import resolve_target_user

from .models import CommuteBreakdown, CommuteLog, LogCommuteRequest
from .service import CommuteService

router = APIRouter()


@router.get("", response_model=list[CommuteLog])
async def list_commutes(
    user_id: int = Depends(resolve_target_user),
    service: CommuteService = Depends(get_commute_service),
) -> list[CommuteLog]:
    """All commute logs of the user, oldest week first."""
    return await service.get_logs(user_id)


@router.get("/current", response_model=list[CommuteLog])
async def current_week_commutes(
    user_id: int = Depends(resolve_target_user),
    service: CommuteService = Depends(get_commute_service),
) -> list[CommuteLog]:
    return await service.get_current_week_logs(user_id)


@router.get("/breakdown", response_model=CommuteBreakdown)
async def commute_breakdown(
    user_id: int = Depends(resolve_target_user),
    service: CommuteService = Depends(get_commute_service),
) -> CommuteBreakdown:
    return await service.get_breakdown(user_id)


@router.post("", response_model=CommuteLog, status_code=201)
async def log_commute(
    request: LogCommuteRequest,
    response: Response,
    user_id: int = Depends(resolve_target_user),
    service: CommuteService = Depends(get_commute_service),
) -> CommuteLog:
    """
    Log a week of commuting in one mode.

    Returns 201 for a new log and 200 when this week's log for the
    same mode was updated instead.
    """
    log, created = await service.log_commute(user_id, request)
    if not created:
        response.status_code = 200
    return log
