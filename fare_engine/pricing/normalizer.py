"""Billing distance normalizer.

One-way outstation trips are billed for twice the tracked distance: the
driver returns empty, so the customer pays the round-trip equivalent. Round
trips already include both legs in the GPS trail.
"""

from fare_engine.core.exceptions import ValidationError
from fare_engine.trip import BookingType, TripDirection

# Outstation bookings without a recorded direction are priced as one-way.
# This is the conservative (higher-priced) business default.
DEFAULT_TRIP_DIRECTION = TripDirection.ONE_WAY

ONE_WAY_MULTIPLIER = 2


def normalize_billing_distance(
    tracked_distance_km: float,
    booking_type: BookingType | str,
    trip_direction: TripDirection | str | None,
    default_direction: TripDirection = DEFAULT_TRIP_DIRECTION,
) -> float:
    """Convert tracked GPS distance into the distance charged to the customer."""
    if tracked_distance_km < 0:
        raise ValidationError(
            f"Tracked distance cannot be negative: {tracked_distance_km}",
            details={"tracked_distance_km": tracked_distance_km},
        )

    if BookingType(booking_type) != BookingType.OUTSTATION:
        return tracked_distance_km

    direction = TripDirection(trip_direction) if trip_direction else default_direction
    if direction == TripDirection.ONE_WAY:
        return tracked_distance_km * ONE_WAY_MULTIPLIER
    return tracked_distance_km
