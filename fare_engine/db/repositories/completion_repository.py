"""Trip completion repository: stored fares and reporting queries."""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from fare_engine.core.exceptions import PersistenceError, TripCompletionPersistenceError
from fare_engine.pricing.breakdown import FareBreakdown
from fare_engine.trip import BookingType, TripContext

from ..schema import TripCompletion


class TripCompletionRepository:
    """Repository for the trip_completions table."""

    def __init__(self, session: Session):
        self.session = session

    def save(self, trip: TripContext, breakdown: FareBreakdown) -> TripCompletion:
        """Store a breakdown. Flushes so store failures surface here.

        Raises:
            PersistenceError: the store is temporarily unavailable
            TripCompletionPersistenceError: the store rejected the row
        """
        completion = TripCompletion(
            trip_id=breakdown.trip_id,
            driver_id=trip.driver_id or "",
            booking_type=breakdown.booking_type.value,
            vehicle_type=breakdown.vehicle_type,
            pricing_method=breakdown.pricing_method.value,
            billing_distance_km=breakdown.billing_distance_km,
            tracked_distance_km=breakdown.tracked_distance_km,
            duration_minutes=breakdown.duration_minutes,
            distance_source=breakdown.distance_source,
            base_fare=breakdown.base_fare,
            distance_fare=breakdown.distance_fare,
            hourly_charges=breakdown.hourly_charges,
            driver_allowance=breakdown.driver_allowance,
            extra_km_charges=breakdown.extra_km_charges,
            deadhead_charge=breakdown.deadhead_charge,
            platform_fee=breakdown.platform_fee,
            gst_on_charges=breakdown.gst_on_charges,
            gst_on_platform_fee=breakdown.gst_on_platform_fee,
            total_fare=breakdown.total_fare,
            fare_details=breakdown.model_dump_json(),
        )
        self.session.add(completion)
        try:
            self.session.flush()
        except OperationalError as e:
            raise PersistenceError(
                f"Store unavailable while saving trip {breakdown.trip_id}",
                details={"trip_id": breakdown.trip_id, "error": str(e.orig)},
            ) from e
        except IntegrityError as e:
            raise TripCompletionPersistenceError(breakdown.trip_id, str(e.orig)) from e
        return completion

    def get_by_trip(self, trip_id: str) -> FareBreakdown | None:
        stmt = select(TripCompletion).where(TripCompletion.trip_id == trip_id)
        row = self.session.execute(stmt).scalar_one_or_none()
        if row is None:
            return None
        return FareBreakdown.model_validate_json(row.fare_details)

    def list_by_driver(self, driver_id: str, limit: int = 50) -> list[TripCompletion]:
        """Most recent completions for a driver."""
        stmt = (
            select(TripCompletion)
            .where(TripCompletion.driver_id == driver_id)
            .order_by(TripCompletion.completed_at.desc(), TripCompletion.id.desc())
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars().all())

    def list_by_booking_type(self, booking_type: BookingType | str) -> list[TripCompletion]:
        stmt = (
            select(TripCompletion)
            .where(TripCompletion.booking_type == BookingType(booking_type).value)
            .order_by(TripCompletion.completed_at.desc(), TripCompletion.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def driver_total_earnings(self, driver_id: str) -> Decimal:
        """Sum of total fares across a driver's completed trips."""
        stmt = select(func.coalesce(func.sum(TripCompletion.total_fare), 0)).where(
            TripCompletion.driver_id == driver_id
        )
        total = self.session.execute(stmt).scalar_one()
        return Decimal(str(total)).quantize(Decimal("0.01"))
