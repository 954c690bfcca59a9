"""
Commutes module data models.
"""

from datetime import date, datetime
from enum import Enum
from pydantic import BaseModel, Field


class CommuteType(str, Enum):
    """Transportation mode used for one logged week-entry."""

    WALK = "walk"
    CYCLE = "cycle"
    PUBLIC_TRANSPORT = "public_transport"
    CARPOOL = "carpool"
    ELECTRIC_VEHICLE = "electric_vehicle"
    GAS_VEHICLE = "gas_vehicle"
    REMOTE_WORK = "remote_work"

    @property
    def is_sustainable(self) -> bool:
        return self is not CommuteType.GAS_VEHICLE


class CommuteLog(BaseModel):
    """Aggregated commute entry for one user, mode and week."""

    id: int
    user_id: int
    week_start: date = Field(..., description="Sunday that starts the week")
    commute_type: CommuteType
    days_logged: int = Field(..., ge=0, le=7)
    distance_km: float = Field(default=0, ge=0)
    co2_saved_kg: int = Field(default=0, ge=0)
    created_at: datetime


class LogCommuteRequest(BaseModel):
    """Body of POST /api/commutes."""

    commute_type: CommuteType
    days_logged: int = Field(..., ge=0, le=7, description="Days in the week using this mode")
    distance_km: float = Field(default=0, ge=0, description="One-day distance in km")
    week_start: datetime = Field(..., description="Start of the week (Sunday 00:00, local time)")


class CommuteBreakdownItem(BaseModel):
    type: CommuteType
    days: int
    percentage: int


class CommuteBreakdown(BaseModel):
    """Share of logged days per commute mode."""

    breakdown: list[CommuteBreakdownItem] = Field(default_factory=list)
    total_days: int = 0
