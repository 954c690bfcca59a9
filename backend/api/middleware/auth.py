"""
Session authentication dependencies.

Reads the session token from the `trak_session` cookie or an
`Authorization: Bearer` header and resolves it to the caller.
"""

from typing import Optional
from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import (
    ForeignUserAccessError,
    InsufficientPermissionsError,
)
from modules.auth.interfaces import IAuthService
from modules.users.service import UserService
from shared.config import get_settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser, UserRole

from ..dependencies import get_auth_service, get_user_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Bearer header first, then the session cookie."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(get_settings().session_cookie_name)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    return auth.validate_token(extract_token(request, credentials) or "")


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """Dependency that extracts the caller if authenticated, else None."""
    token = extract_token(request, credentials)
    if not token:
        return None

    try:
        return auth.validate_token(token)
    except AuthenticationError:
        return None


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency that requires an admin caller."""
    if not user.is_admin:
        raise InsufficientPermissionsError(UserRole.ADMIN.value, user.role.value)
    return user


async def resolve_target_user(
    user_id: Optional[int] = Query(default=None, alias="userId", description="Target user"),
    user: AuthenticatedUser = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> int:
    """
    Resolve the `userId` query parameter to the user a request acts on.

    Members may only target themselves. Admins may target any user of
    their own company.
    """
    if user_id is None or user_id == user.id:
        return user.id

    if not user.is_admin:
        raise ForeignUserAccessError(user.id, user_id)

    target = await users.get_user(user_id)
    if target.company_id != user.company_id:
        raise ForeignUserAccessError(user.id, user_id)
    return target.id


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
RequireAdmin = Depends(require_admin)
TargetUser = Depends(resolve_target_user)
