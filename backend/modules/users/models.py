"""
Users module data models.

These models define the user record, its public projection,
and the request/transfer shapes used by the users and auth modules.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field

from shared.models import UserRole


class PublicUser(BaseModel):
    """User as exposed to clients (never carries the password hash)."""

    model_config = {"extra": "ignore"}

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Unique login name")
    email: str = Field(..., description="Unique email address")
    name: str = Field(..., description="Display name")
    role: UserRole = Field(default=UserRole.MEMBER, description="Account role")
    company_id: Optional[int] = Field(None, description="Company the user belongs to")
    is_new_user: bool = Field(default=True, description="Onboarding not finished yet")
    needs_password_change: bool = Field(
        default=False, description="User must pick a new password on next login"
    )
    points_total: int = Field(default=0, description="Accumulated points")
    streak_count: int = Field(default=0, description="Consecutive qualifying weeks")
    created_at: datetime = Field(..., description="Account creation time")


class User(PublicUser):
    """Full user record as stored by the backends."""

    password: str = Field(..., description="bcrypt hash of the password")

    def to_public(self) -> PublicUser:
        return PublicUser.model_validate(self.model_dump(exclude={"password"}))


class UserUpdate(BaseModel):
    """
    Sparse update restricted to onboarding flags and the password.

    A field counts as provided when it is not None, so False and ""
    overwrite the stored value while omitted fields keep theirs.
    """

    model_config = {"extra": "forbid"}

    is_new_user: Optional[bool] = None
    needs_password_change: Optional[bool] = None
    password: Optional[str] = None

    def provided_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class NewUser(BaseModel):
    """Data needed to insert a user; the password is already hashed."""

    username: str
    email: str
    name: str
    password: str
    role: UserRole = UserRole.MEMBER
    company_id: Optional[int] = None
    is_new_user: bool = True
    needs_password_change: bool = False


class RegisterRequest(BaseModel):
    """Request to create a member account."""

    username: str = Field(..., min_length=3, max_length=64)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=6, max_length=128)
    company_id: Optional[int] = None


class PointsTransaction(BaseModel):
    """One change to a user's points balance."""

    id: int
    user_id: int
    source: str
    points: int
    created_at: datetime
