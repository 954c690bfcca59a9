"""
Challenges module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, model_validator

from modules.commutes.models import CommuteType


class GoalType(str, Enum):
    """What a challenge counts towards its goal."""

    DAYS = "days"
    KM = "km"


class Challenge(BaseModel):
    """A time-boxed goal users can join for bonus points."""

    id: int
    title: str
    description: str = ""
    start_date: datetime
    end_date: datetime
    points_reward: int = Field(default=0, ge=0)
    goal_type: GoalType = GoalType.DAYS
    goal_value: int
    commute_type: Optional[CommuteType] = Field(
        None, description="Only logs of this mode count; None means any sustainable mode"
    )
    company_id: Optional[int] = Field(None, description="None for global challenges")
    created_at: datetime


class ChallengeParticipant(BaseModel):
    """One user's participation in one challenge."""

    id: int
    challenge_id: int
    user_id: int
    progress: int = 0
    completed: bool = False
    joined_at: datetime


class UserChallenge(BaseModel):
    challenge: Challenge
    participant: ChallengeParticipant


class CreateChallengeRequest(BaseModel):
    """Body of POST /api/challenges. The company comes from the admin."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    start_date: datetime
    end_date: datetime
    points_reward: int = Field(default=0, ge=0)
    goal_type: GoalType = GoalType.DAYS
    goal_value: int = Field(..., gt=0)
    commute_type: Optional[CommuteType] = None

    @model_validator(mode="after")
    def check_dates(self) -> "CreateChallengeRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class UpdateChallengeRequest(BaseModel):
    """Body of PUT /api/challenges/{id}. Omitted fields are kept."""

    model_config = {"extra": "forbid"}

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    points_reward: Optional[int] = Field(None, ge=0)
    goal_type: Optional[GoalType] = None
    goal_value: Optional[int] = Field(None, gt=0)
    commute_type: Optional[CommuteType] = None

    def provided_fields(self) -> dict[str, Any]:
        """Set fields in their JSON form, ready for either repository."""
        return self.model_dump(mode="json", exclude_none=True)
