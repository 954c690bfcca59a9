"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Role of a Trak account."""

    MEMBER = "member"
    ADMIN = "admin"


class AuthenticatedUser(BaseModel):
    """
    Represents the caller of an API request.

    Populated from the session token claims and made available
    to route handlers via dependency injection.
    """

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Login name")
    role: UserRole = Field(default=UserRole.MEMBER, description="Account role")
    company_id: Optional[int] = Field(None, description="Company the user belongs to")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
