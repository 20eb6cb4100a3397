from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from fare_engine.geo.zones import ZoneClassification
from fare_engine.tracking.models import TrackingFlag
from fare_engine.trip import BookingType


class PricingMethod(str, Enum):
    SLAB = "slab"
    PER_KM = "perKm"


class FareBreakdown(BaseModel):
    """Final fare for one completed trip.

    Created once at trip completion and never mutated; a correction needs a
    new trip record.
    """

    model_config = ConfigDict(frozen=True)

    trip_id: str
    booking_type: BookingType
    vehicle_type: str

    base_fare: Decimal = Field(ge=0)
    distance_fare: Decimal = Field(ge=0)
    hourly_charges: Decimal | None = Field(default=None, ge=0)
    driver_allowance: Decimal | None = Field(default=None, ge=0)
    extra_km_charges: Decimal = Field(ge=0)
    deadhead_charge: Decimal = Field(ge=0)
    surge_charges: Decimal = Field(default=Decimal("0.00"), ge=0)
    airport_surcharge: Decimal = Field(default=Decimal("0.00"), ge=0)
    platform_fee: Decimal = Field(ge=0)
    gst_on_charges: Decimal = Field(ge=0)
    gst_on_platform_fee: Decimal = Field(ge=0)
    total_fare: Decimal = Field(ge=0)

    billing_distance_km: float = Field(ge=0.0)
    tracked_distance_km: float = Field(ge=0.0)
    duration_minutes: int = Field(ge=0)
    pricing_method: PricingMethod
    slab_label: str | None = None

    dropoff_zone: ZoneClassification | None = None
    dropoff_source: str | None = None
    distance_source: str | None = None
    tracking_flags: tuple[TrackingFlag, ...] = ()
    stationary: bool = False

    @property
    def charges_subtotal(self) -> Decimal:
        return (
            self.base_fare
            + self.distance_fare
            + (self.hourly_charges or 0)
            + self.extra_km_charges
            + self.deadhead_charge
            + (self.driver_allowance or 0)
            + self.surge_charges
            + self.airport_surcharge
        )
