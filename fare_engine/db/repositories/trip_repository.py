"""Trip repository: booking records and the completion status guard."""

from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from fare_engine.core.exceptions import TripStateError
from fare_engine.trip import TripContext, TripDirection, TripStatus

from ..schema import Trip
from ..utils import utc_now


class TripRepository:
    """Repository for trip CRUD operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        trip: TripContext,
        status: TripStatus = TripStatus.IN_PROGRESS,
        started_at: datetime | None = None,
    ) -> None:
        """Create a trip from its booking context."""
        pickup_lat, pickup_lon = trip.pickup
        dest_lat, dest_lon = trip.destination
        self.session.add(
            Trip(
                trip_id=trip.trip_id,
                driver_id=trip.driver_id or "",
                customer_id=trip.customer_id,
                booking_type=trip.booking_type.value,
                vehicle_type=trip.vehicle_type,
                trip_direction=trip.trip_direction.value if trip.trip_direction else None,
                status=status.value,
                pickup_lat=pickup_lat,
                pickup_lon=pickup_lon,
                destination_lat=dest_lat,
                destination_lon=dest_lon,
                rental_hours=trip.rental_hours,
                started_at=started_at or utc_now(),
            )
        )

    def get(self, trip_id: str) -> Trip | None:
        """Get trip by ID."""
        return self.session.get(Trip, trip_id)

    def mark_completed(self, trip_id: str, completed_at: datetime | None = None) -> None:
        """Flip an in-progress trip to completed.

        The update only matches rows still in progress, so a second
        completion of the same trip raises instead of overwriting.
        """
        now = completed_at or utc_now()
        stmt = (
            update(Trip)
            .where(Trip.trip_id == trip_id, Trip.status == TripStatus.IN_PROGRESS.value)
            .values(status=TripStatus.COMPLETED.value, completed_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        if result.rowcount == 0:
            trip = self.session.get(Trip, trip_id)
            raise TripStateError(trip_id, trip.status if trip else "missing")


def to_trip_context(trip: Trip) -> TripContext:
    """Build the pricing context from a stored trip."""
    return TripContext(
        trip_id=trip.trip_id,
        booking_type=trip.booking_type,
        vehicle_type=trip.vehicle_type,
        trip_direction=TripDirection(trip.trip_direction) if trip.trip_direction else None,
        pickup=(trip.pickup_lat, trip.pickup_lon),
        destination=(trip.destination_lat, trip.destination_lon),
        rental_hours=trip.rental_hours,
        driver_id=trip.driver_id or None,
        customer_id=trip.customer_id,
    )
