"""
Authentication endpoints.

Register, log in and log out. Successful register/login set the
session cookie and also return the token for bearer-style clients.
"""

import logging
from fastapi import APIRouter, Depends, Response

from api.dependencies import get_auth_service, get_user_service
from modules.users.models import RegisterRequest
from modules.users.service import UserService
from shared.config import Settings, get_settings

from .interfaces import IAuthService
from .models import LoginRequest, LoginResponse, LogoutResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@router.post("/register", response_model=LoginResponse, status_code=201)
async def register(
    request: RegisterRequest,
    response: Response,
    users: UserService = Depends(get_user_service),
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Create a member account and start a session for it."""
    user = await users.register(request)
    token = auth.issue_token(user)
    set_session_cookie(response, token, settings)
    return LoginResponse(user=user.to_public(), auth_token=token)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    users: UserService = Depends(get_user_service),
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """
    Log in with a username (or email) and password.

    Responds 401 with INVALID_CREDENTIALS when either is wrong.
    """
    user = await users.authenticate(request.username, request.password)
    token = auth.issue_token(user)
    set_session_cookie(response, token, settings)
    logger.info(f"User {user.id} logged in")
    return LoginResponse(user=user.to_public(), auth_token=token)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> LogoutResponse:
    response.delete_cookie(settings.session_cookie_name)
    return LogoutResponse(message="Logged out successfully")
