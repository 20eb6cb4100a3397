"""GPS fix and tracked-distance models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TripFix(BaseModel):
    """One GPS sample recorded during a trip."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    recorded_at: datetime
    speed_kmh: float | None = Field(default=None, ge=0.0)
    accuracy_m: float | None = Field(default=None, ge=0.0)

    @field_validator("recorded_at")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("recorded_at must be timezone-aware")
        return v

    @property
    def coordinate(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


class TrackingFlag(str, Enum):
    """Advisory tracking-quality flags. Never block fare computation."""

    TRACKING_INCOMPLETE = "tracking_incomplete"
    ERRATIC_TRACKING = "erratic_tracking"


class TrackedDistance(BaseModel):
    model_config = ConfigDict(frozen=True)

    distance_km: float = Field(ge=0.0)
    fixes_used: int = Field(ge=0)
    duration_minutes: int = Field(ge=0)
    stationary: bool = False
    straight_line_km: float | None = None
    flags: tuple[TrackingFlag, ...] = ()
