"""Trip metadata consumed by the fare engine."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BookingType(str, Enum):
    """Trip categories, each with its own rate structure."""

    OUTSTATION = "outstation"
    RENTAL = "rental"
    AIRPORT = "airport"
    REGULAR = "regular"


class TripDirection(str, Enum):
    ONE_WAY = "one_way"
    ROUND_TRIP = "round_trip"


class TripStatus(str, Enum):
    """Trip lifecycle states relevant to completion."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TripContext(BaseModel):
    """Booking/ride record fields needed to price one trip."""

    model_config = ConfigDict(frozen=True)

    trip_id: str
    booking_type: BookingType
    vehicle_type: str
    trip_direction: TripDirection | None = None
    pickup: tuple[float, float]
    destination: tuple[float, float]
    rental_hours: float | None = Field(default=None, gt=0)
    driver_id: str | None = None
    customer_id: str | None = None
