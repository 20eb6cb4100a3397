"""Deadhead (empty return) compensation.

A driver dropping a passenger where return fares are unlikely is paid for
the empty drive back. Which zones qualify is a deployment choice; see
``DeadheadSettings.strategy``.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fare_engine.core.money import ZERO, km_charge, round_money
from fare_engine.geo.zones import ZoneClassification, ZoneRings, classify_dropoff
from fare_engine.settings import DeadheadSettings
from fare_engine.tracking.models import TripFix
from fare_engine.trip import BookingType

logger = logging.getLogger(__name__)


class DeadheadStrategy(str, Enum):
    RING_BAND_ONLY = "ring-band-only"
    ANY_RING = "any-ring"
    INNER_RING_ONLY = "inner-ring-only"

    @property
    def charged_zones(self) -> frozenset[ZoneClassification]:
        return _CHARGED_ZONES[self]


_CHARGED_ZONES: dict[DeadheadStrategy, frozenset[ZoneClassification]] = {
    DeadheadStrategy.RING_BAND_ONLY: frozenset({ZoneClassification.BETWEEN_RINGS}),
    DeadheadStrategy.ANY_RING: frozenset(
        {ZoneClassification.INSIDE_INNER, ZoneClassification.BETWEEN_RINGS}
    ),
    DeadheadStrategy.INNER_RING_ONLY: frozenset({ZoneClassification.INSIDE_INNER}),
}


class DropoffPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    source: Literal["gps", "booking"]


def select_dropoff(
    fixes: Sequence[TripFix],
    booking_destination: tuple[float, float],
) -> DropoffPoint:
    """Use the final GPS fix as the drop-off, else the booked destination."""
    if fixes:
        last = fixes[-1]
        return DropoffPoint(latitude=last.latitude, longitude=last.longitude, source="gps")

    lat, lon = booking_destination
    logger.info("No GPS fixes for drop-off; using booked destination")
    return DropoffPoint(latitude=lat, longitude=lon, source="booking")


class DeadheadResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    charge: Decimal = Field(ge=0)
    classification: ZoneClassification | None = None
    applied: bool = False


class DeadheadEvaluator:
    """Classifies the drop-off and computes the deadhead charge."""

    def __init__(self, rings: ZoneRings, settings: DeadheadSettings | None = None) -> None:
        self.rings = rings
        self.settings = settings or DeadheadSettings()
        self.strategy = DeadheadStrategy(self.settings.strategy)

    def evaluate(
        self,
        dropoff: DropoffPoint,
        booking_type: BookingType | str,
        per_km_rate: Decimal = ZERO,
    ) -> DeadheadResult:
        booking = BookingType(booking_type)
        if booking.value not in self.settings.booking_types:
            return DeadheadResult(charge=ZERO)

        classification = classify_dropoff(
            dropoff.latitude, dropoff.longitude, self.rings.inner, self.rings.outer
        )
        if classification not in self.strategy.charged_zones:
            logger.debug(f"Drop-off {classification.value}: no deadhead under {self.strategy.value}")
            return DeadheadResult(charge=ZERO, classification=classification)

        charge = self._charge(dropoff, per_km_rate)
        logger.info(
            f"Deadhead charge {charge} for {classification.value} drop-off "
            f"({dropoff.source}, {self.settings.charge_mode})"
        )
        return DeadheadResult(charge=charge, classification=classification, applied=True)

    def _charge(self, dropoff: DropoffPoint, per_km_rate: Decimal) -> Decimal:
        if self.settings.charge_mode == "half_return_distance":
            return_km = self.rings.inner.distance_from_center_km(
                dropoff.latitude, dropoff.longitude
            )
            return km_charge(return_km / 2, per_km_rate)
        return round_money(self.settings.flat_charge)
