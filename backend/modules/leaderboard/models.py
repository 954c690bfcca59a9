"""
Leaderboard module data models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class LeaderboardEntry(BaseModel):
    """One row of the leaderboard. Never carries credentials."""

    id: int
    name: str
    email: str
    points_total: int = 0
    streak_count: int = 0


class UserStats(BaseModel):
    """Derived, read-only summary for one user."""

    points: int = 0
    streak: int = 0
    co2_saved: int = Field(default=0, description="Total kg of CO2 saved")
    completed_challenges: int = 0


class RankTier(BaseModel):
    """Named points band shown next to a user's rank."""

    name: str
    min_points: int
    max_points: Optional[int] = Field(None, description="None for the top tier")
