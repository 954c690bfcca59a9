"""
Rewards module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Reward(BaseModel):
    """Something users can buy with points."""

    id: int
    title: str
    description: str = ""
    cost_points: int = Field(..., ge=0)
    quantity_limit: Optional[int] = Field(None, description="Total redemptions allowed; None for unlimited")
    company_id: Optional[int] = Field(None, description="None for global rewards")
    created_at: datetime


class Redemption(BaseModel):
    id: int
    user_id: int
    reward_id: int
    redeemed_at: datetime


class UserRedemption(BaseModel):
    reward: Reward
    redemption: Redemption


class CreateRewardRequest(BaseModel):
    """Body of POST /api/rewards. The company comes from the admin."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    cost_points: int = Field(..., ge=0)
    quantity_limit: Optional[int] = Field(None, ge=1)


class RedeemResponse(BaseModel):
    """Result of a successful redemption."""

    redemption: Redemption
    reward: Reward
