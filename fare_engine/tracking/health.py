"""GPS health check for an in-progress trip."""

from collections.abc import Sequence
from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from .models import TripFix


class GPSHealthStatus(str, Enum):
    OK = "ok"
    NO_POINTS = "no_points"
    STALE = "stale"


class GPSHealth(BaseModel):
    status: GPSHealthStatus
    fix_count: int
    minutes_since_last_fix: float | None = None


def check_gps_health(
    fixes: Sequence[TripFix],
    now: datetime,
    stale_after_minutes: float = 5.0,
) -> GPSHealth:
    """Report whether tracking is still delivering fixes."""
    if not fixes:
        return GPSHealth(status=GPSHealthStatus.NO_POINTS, fix_count=0)

    last = max(f.recorded_at for f in fixes)
    minutes = (now - last).total_seconds() / 60
    status = GPSHealthStatus.STALE if minutes > stale_after_minutes else GPSHealthStatus.OK
    return GPSHealth(status=status, fix_count=len(fixes), minutes_since_last_fix=minutes)
