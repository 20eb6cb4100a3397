"""Rate resolver: picks the slab or per-km rate for a billing distance."""

import logging
import math
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from fare_engine.core.exceptions import RateConfigMissingError, ValidationError
from fare_engine.core.money import ZERO, km_charge, round_money, to_decimal
from fare_engine.trip import BookingType

from .breakdown import PricingMethod
from .rates import PlatformFee, RateCard, RateSlab, RateTable

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


class RateQuote(BaseModel):
    """Rate components for one trip, before surcharges and taxes."""

    model_config = ConfigDict(frozen=True)

    method: PricingMethod
    fare: Decimal = Field(ge=0)
    base_fare: Decimal = Field(ge=0)
    distance_fare: Decimal = Field(ge=0)
    extra_km_charges: Decimal = Field(default=ZERO, ge=0)
    hourly_charges: Decimal | None = None
    driver_allowance: Decimal | None = None
    airport_surcharge: Decimal = Field(default=ZERO, ge=0)
    surge_multiplier: float = Field(default=1.0, ge=1.0)
    per_km_rate: Decimal = Field(default=ZERO, ge=0)
    slab_label: str | None = None
    days: int | None = None
    platform_fee: PlatformFee = Field(default_factory=PlatformFee)


def trip_days(duration_hours: float | None) -> int:
    """Calendar days billed for an outstation trip (at least one)."""
    if not duration_hours or duration_hours <= 0:
        return 1
    return max(1, math.ceil(duration_hours / HOURS_PER_DAY))


class RateResolver:
    """Resolves a RateQuote from a read-only RateTable."""

    def __init__(self, rate_table: RateTable) -> None:
        self.rate_table = rate_table

    def resolve(
        self,
        vehicle_type: str,
        booking_type: BookingType | str,
        billing_distance_km: float,
        duration_hours: float | None = None,
    ) -> RateQuote:
        if billing_distance_km < 0:
            raise ValidationError(
                f"Billing distance cannot be negative: {billing_distance_km}",
                details={"billing_distance_km": billing_distance_km},
            )

        booking = BookingType(booking_type)
        card = self.rate_table.lookup(vehicle_type, booking)
        if card is None:
            raise RateConfigMissingError(vehicle_type, booking.value)

        if booking == BookingType.OUTSTATION:
            return self._resolve_outstation(card, billing_distance_km, duration_hours)
        if booking == BookingType.RENTAL:
            return self._resolve_rental(card, billing_distance_km, duration_hours)
        if booking == BookingType.AIRPORT:
            return self._resolve_airport(card, billing_distance_km)
        return self._resolve_regular(card, billing_distance_km)

    def _resolve_outstation(
        self, card: RateCard, billing_km: float, duration_hours: float | None
    ) -> RateQuote:
        days = trip_days(duration_hours)

        if card.slabs and days <= card.slab_max_days:
            slab, extra_km = select_slab(card.slabs, billing_km)
            quote = self._slab_quote(card, slab, extra_km, billing_km)
            return quote.model_copy(update={"driver_allowance": ZERO, "days": days})

        if not card.slabs:
            logger.warning(
                f"No slab table for {card.vehicle_type}/outstation; falling back to per-km"
            )
            quote = self._per_km_quote(card, billing_km)
            return quote.model_copy(update={"days": days})

        logger.info(
            f"Outstation trip spans {days} days (> {card.slab_max_days}); "
            "using per-km rates instead of slabs"
        )
        per_km_rate = self._require_per_km(card)
        charged_km = billing_km
        if card.daily_km_limit is not None:
            charged_km = max(billing_km, card.daily_km_limit * days)

        base_fare = round_money(card.base_fare)
        distance_fare = km_charge(charged_km, per_km_rate)
        return RateQuote(
            method=PricingMethod.PER_KM,
            fare=base_fare + distance_fare,
            base_fare=base_fare,
            distance_fare=distance_fare,
            driver_allowance=round_money(card.driver_allowance_per_day * days),
            per_km_rate=per_km_rate,
            days=days,
            platform_fee=card.platform_fee,
        )

    def _resolve_rental(
        self, card: RateCard, billing_km: float, duration_hours: float | None
    ) -> RateQuote:
        included_hours = card.included_hours
        if card.slabs:
            slab, extra_km = select_slab(card.slabs, billing_km)
            quote = self._slab_quote(card, slab, extra_km, billing_km)
            if slab.included_hours is not None:
                included_hours = slab.included_hours
        else:
            logger.warning(f"No slab table for {card.vehicle_type}/rental; falling back to per-km")
            quote = self._per_km_quote(card, billing_km)

        hours_used = duration_hours or 0.0
        overage_hours = max(0.0, hours_used - included_hours)
        hourly_charges = round_money(to_decimal(overage_hours) * card.hourly_overage_rate)
        return quote.model_copy(update={"hourly_charges": hourly_charges})

    def _resolve_airport(self, card: RateCard, billing_km: float) -> RateQuote:
        quote = self._per_km_quote(card, billing_km)
        return quote.model_copy(update={"airport_surcharge": round_money(card.airport_surcharge)})

    def _resolve_regular(self, card: RateCard, billing_km: float) -> RateQuote:
        per_km_rate = self._require_per_km(card)
        chargeable_km = max(0.0, billing_km - card.base_km_included)
        base_fare = round_money(card.base_fare)
        distance_fare = km_charge(chargeable_km, per_km_rate)
        return RateQuote(
            method=PricingMethod.PER_KM,
            fare=base_fare + distance_fare,
            base_fare=base_fare,
            distance_fare=distance_fare,
            surge_multiplier=card.surge_multiplier,
            per_km_rate=per_km_rate,
            platform_fee=card.platform_fee,
        )

    def _slab_quote(
        self, card: RateCard, slab: RateSlab, extra_km: float, billing_km: float
    ) -> RateQuote:
        extra_km_charges = km_charge(extra_km, card.extra_km_rate) if extra_km > 0 else ZERO
        slab_fare = round_money(slab.flat_fare)

        logger.debug(
            f"Selected {slab.display_label} for {billing_km:.2f}km "
            f"(extra {extra_km:.2f}km = {extra_km_charges})"
        )
        return RateQuote(
            method=PricingMethod.SLAB,
            fare=slab_fare,
            base_fare=slab_fare,
            distance_fare=ZERO,
            extra_km_charges=extra_km_charges,
            per_km_rate=card.per_km_rate or card.extra_km_rate,
            slab_label=slab.display_label,
            platform_fee=card.platform_fee,
        )

    def _per_km_quote(self, card: RateCard, billing_km: float) -> RateQuote:
        per_km_rate = self._require_per_km(card)
        base_fare = round_money(card.base_fare)
        distance_fare = km_charge(billing_km, per_km_rate)
        return RateQuote(
            method=PricingMethod.PER_KM,
            fare=base_fare + distance_fare,
            base_fare=base_fare,
            distance_fare=distance_fare,
            per_km_rate=per_km_rate,
            platform_fee=card.platform_fee,
        )

    @staticmethod
    def _require_per_km(card: RateCard) -> Decimal:
        if card.per_km_rate is None:
            raise RateConfigMissingError(card.vehicle_type, card.booking_type.value)
        return card.per_km_rate


def select_slab(slabs: tuple[RateSlab, ...], billing_km: float) -> tuple[RateSlab, float]:
    """Return the first slab covering billing_km, and the km beyond it.

    Coverage is inclusive. Past the largest slab, the largest slab is
    returned with the overflow distance.
    """
    if not slabs:
        raise ValueError("select_slab requires at least one slab")

    for slab in slabs:
        if billing_km <= slab.coverage_km:
            return slab, 0.0

    largest = slabs[-1]
    return largest, billing_km - largest.coverage_km
