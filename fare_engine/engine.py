"""Fare engine: GPS fixes in, FareBreakdown out.

The pipeline is pure computation. Loading fixes and storing the result are
the caller's job (see ``completion``).
"""

import logging
from collections.abc import Sequence

from fare_engine.config import FareConfig
from fare_engine.pricing.aggregator import FareAggregator
from fare_engine.pricing.breakdown import FareBreakdown
from fare_engine.pricing.deadhead import DeadheadEvaluator, select_dropoff
from fare_engine.pricing.normalizer import normalize_billing_distance
from fare_engine.pricing.resolver import RateResolver
from fare_engine.tracking.models import TripFix
from fare_engine.tracking.reducer import GPSDistanceReducer
from fare_engine.trip import BookingType, TripContext, TripDirection

logger = logging.getLogger(__name__)


class FareEngine:
    """Computes the fare for one completed trip."""

    def __init__(self, config: FareConfig) -> None:
        self.config = config
        self.reducer = GPSDistanceReducer(config.tracking)
        self.resolver = RateResolver(config.rate_table)
        self.deadhead = DeadheadEvaluator(config.zone_rings, config.deadhead)
        self.aggregator = FareAggregator(
            gst_charges_rate=config.engine.gst_charges_rate,
            gst_platform_rate=config.engine.gst_platform_rate,
        )
        self.default_direction = TripDirection(config.engine.default_trip_direction)

    def calculate(
        self,
        trip: TripContext,
        fixes: Sequence[TripFix],
        distance_source: str | None = None,
    ) -> FareBreakdown:
        """Run the full pipeline for one trip.

        Raises:
            InsufficientGPSDataError: too few fixes for a non-stationary trip
            RateConfigMissingError: no usable rate for the vehicle/booking pair
        """
        tracked = self.reducer.reduce(
            fixes, start=trip.pickup, end=trip.destination, trip_id=trip.trip_id
        )

        billing_km = normalize_billing_distance(
            tracked.distance_km,
            trip.booking_type,
            trip.trip_direction,
            default_direction=self.default_direction,
        )
        if trip.booking_type == BookingType.OUTSTATION and trip.trip_direction is None:
            logger.warning(
                f"Trip {trip.trip_id} has no trip direction; "
                f"billing as {self.default_direction.value}"
            )

        quote = self.resolver.resolve(
            trip.vehicle_type,
            trip.booking_type,
            billing_km,
            duration_hours=tracked.duration_minutes / 60,
        )

        dropoff = select_dropoff(fixes, trip.destination)
        deadhead = self.deadhead.evaluate(dropoff, trip.booking_type, quote.per_km_rate)

        logger.info(
            f"Trip {trip.trip_id}: tracked {tracked.distance_km:.2f}km, "
            f"billing {billing_km:.2f}km via {quote.method.value}"
        )
        return self.aggregator.aggregate(
            trip,
            quote,
            deadhead,
            tracked,
            billing_distance_km=billing_km,
            dropoff=dropoff,
            distance_source=distance_source,
        )
