"""Combines rate, deadhead and platform components into the final fare."""

import logging
from decimal import Decimal

from fare_engine.core.money import ZERO, round_money, round_total
from fare_engine.tracking.models import TrackedDistance
from fare_engine.trip import TripContext

from .breakdown import FareBreakdown
from .deadhead import DeadheadResult, DropoffPoint
from .rates import PlatformFee
from .resolver import RateQuote

logger = logging.getLogger(__name__)

DEFAULT_GST_CHARGES_RATE = Decimal("0.05")
DEFAULT_GST_PLATFORM_RATE = Decimal("0.18")


def platform_fee_amount(fee: PlatformFee, charges_subtotal: Decimal) -> Decimal:
    if fee.fee_type == "percentage":
        return round_money(charges_subtotal * fee.amount / 100)
    return round_money(fee.amount)


class FareAggregator:
    """Builds the final FareBreakdown.

    Every intermediate amount is rounded to cents before it is summed; only
    the total is rounded to a whole unit. GST on charges and GST on the
    platform fee are computed separately because they use different rates.
    """

    def __init__(
        self,
        gst_charges_rate: Decimal = DEFAULT_GST_CHARGES_RATE,
        gst_platform_rate: Decimal = DEFAULT_GST_PLATFORM_RATE,
    ) -> None:
        self.gst_charges_rate = gst_charges_rate
        self.gst_platform_rate = gst_platform_rate

    def aggregate(
        self,
        trip: TripContext,
        quote: RateQuote,
        deadhead: DeadheadResult,
        tracked: TrackedDistance,
        billing_distance_km: float,
        dropoff: DropoffPoint | None = None,
        distance_source: str | None = None,
    ) -> FareBreakdown:
        surge_charges = ZERO
        if quote.surge_multiplier > 1.0:
            surge_base = quote.base_fare + quote.distance_fare + deadhead.charge
            surge_charges = round_money(surge_base * Decimal(str(quote.surge_multiplier - 1.0)))

        subtotal = (
            quote.base_fare
            + quote.distance_fare
            + (quote.hourly_charges or ZERO)
            + quote.extra_km_charges
            + deadhead.charge
            + (quote.driver_allowance or ZERO)
            + surge_charges
            + quote.airport_surcharge
        )

        gst_on_charges = round_money(subtotal * self.gst_charges_rate)
        platform_fee = platform_fee_amount(quote.platform_fee, subtotal)
        gst_on_platform_fee = round_money(platform_fee * self.gst_platform_rate)
        total = round_total(subtotal + gst_on_charges + platform_fee + gst_on_platform_fee)

        logger.info(
            f"Fare for trip {trip.trip_id}: subtotal={subtotal} gst={gst_on_charges} "
            f"platform={platform_fee}+{gst_on_platform_fee} total={total}"
        )

        return FareBreakdown(
            trip_id=trip.trip_id,
            booking_type=trip.booking_type,
            vehicle_type=trip.vehicle_type,
            base_fare=quote.base_fare,
            distance_fare=quote.distance_fare,
            hourly_charges=quote.hourly_charges,
            driver_allowance=quote.driver_allowance,
            extra_km_charges=quote.extra_km_charges,
            deadhead_charge=deadhead.charge,
            surge_charges=surge_charges,
            airport_surcharge=quote.airport_surcharge,
            platform_fee=platform_fee,
            gst_on_charges=gst_on_charges,
            gst_on_platform_fee=gst_on_platform_fee,
            total_fare=total,
            billing_distance_km=round(billing_distance_km, 3),
            tracked_distance_km=round(tracked.distance_km, 3),
            duration_minutes=tracked.duration_minutes,
            pricing_method=quote.method,
            slab_label=quote.slab_label,
            dropoff_zone=deadhead.classification,
            dropoff_source=dropoff.source if dropoff else None,
            distance_source=distance_source,
            tracking_flags=tracked.flags,
            stationary=tracked.stationary,
        )
