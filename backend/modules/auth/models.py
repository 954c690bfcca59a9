"""
Authentication module data models.

These models define the session token claims and the login
request/response shapes.
"""

from typing import Optional
from pydantic import BaseModel, Field

from shared.models import UserRole
from modules.users.models import PublicUser


class SessionClaims(BaseModel):
    """
    Decoded session token payload.

    `sub` is the user id as a string, as the JWT spec requires.
    """

    sub: str = Field(..., description="Subject (user ID)")
    username: str = Field(..., description="Login name at issue time")
    role: UserRole = Field(default=UserRole.MEMBER, description="Account role")
    company_id: Optional[int] = Field(None, description="Company scope")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")


class LoginRequest(BaseModel):
    """Credentials posted to /api/auth/login."""

    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Successful login: the user plus a bearer token for non-cookie clients."""

    user: PublicUser
    auth_token: str


class LogoutResponse(BaseModel):
    message: str = "Logged out successfully"
