"""Rate configuration: slab tables, per-km rates and platform fees.

Rate tables are configuration data. They are loaded read-only for each
calculation and never mutated by the engine.
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fare_engine.trip import BookingType

logger = logging.getLogger(__name__)


class RateSlab(BaseModel):
    """A flat fare covering trips up to ``coverage_km`` billing kilometers."""

    model_config = ConfigDict(frozen=True)

    coverage_km: float = Field(gt=0.0)
    flat_fare: Decimal = Field(ge=0)
    label: str = ""
    # Rental packages; None defers to the card's included_hours
    included_hours: float | None = Field(default=None, ge=0.0)

    @property
    def display_label(self) -> str:
        return self.label or f"{self.coverage_km:g}km slab"


class PlatformFee(BaseModel):
    model_config = ConfigDict(frozen=True)

    fee_type: Literal["fixed", "percentage"] = "fixed"
    amount: Decimal = Field(default=Decimal("10"), ge=0)

    @model_validator(mode="after")
    def validate_percentage(self) -> Self:
        if self.fee_type == "percentage" and self.amount > 100:
            raise ValueError(f"Percentage platform fee cannot exceed 100, got {self.amount}")
        return self


class RateCard(BaseModel):
    """Rates for one (vehicle_type, booking_type) pair.

    Only the fields relevant to the booking type are read; the rest keep
    their zero defaults.
    """

    model_config = ConfigDict(frozen=True)

    vehicle_type: str
    booking_type: BookingType

    base_fare: Decimal = Field(default=Decimal("0"), ge=0)
    per_km_rate: Decimal | None = Field(default=None, ge=0)
    slabs: tuple[RateSlab, ...] = ()
    extra_km_rate: Decimal = Field(default=Decimal("0"), ge=0)
    platform_fee: PlatformFee = Field(default_factory=PlatformFee)

    # Regular rides
    base_km_included: float = Field(default=0.0, ge=0.0)
    surge_multiplier: float = Field(default=1.0, ge=1.0)

    # Rentals
    included_hours: float = Field(default=0.0, ge=0.0)
    hourly_overage_rate: Decimal = Field(default=Decimal("0"), ge=0)

    # Outstation
    driver_allowance_per_day: Decimal = Field(default=Decimal("0"), ge=0)
    daily_km_limit: float | None = Field(default=None, gt=0.0)
    slab_max_days: int = Field(default=1, ge=1)

    # Airport
    airport_surcharge: Decimal = Field(default=Decimal("0"), ge=0)

    @model_validator(mode="after")
    def validate_slab_order(self) -> Self:
        coverages = [s.coverage_km for s in self.slabs]
        if any(b <= a for a, b in zip(coverages, coverages[1:])):
            raise ValueError(
                f"Slabs for {self.vehicle_type}/{self.booking_type.value} must be strictly "
                f"ascending by coverage_km, got {coverages}"
            )
        return self

    @property
    def largest_slab(self) -> RateSlab | None:
        return self.slabs[-1] if self.slabs else None


class RateTable(BaseModel):
    """All rate cards for a deployment, keyed by vehicle and booking type."""

    model_config = ConfigDict(frozen=True)

    cards: tuple[RateCard, ...] = ()

    @model_validator(mode="after")
    def validate_unique_keys(self) -> Self:
        seen: set[tuple[str, BookingType]] = set()
        for card in self.cards:
            key = (card.vehicle_type, card.booking_type)
            if key in seen:
                raise ValueError(
                    f"Duplicate rate card for {card.vehicle_type}/{card.booking_type.value}"
                )
            seen.add(key)
        return self

    def lookup(self, vehicle_type: str, booking_type: BookingType | str) -> RateCard | None:
        booking = BookingType(booking_type)
        for card in self.cards:
            if card.vehicle_type == vehicle_type and card.booking_type == booking:
                return card
        return None


def load_rate_table(path: Path | str) -> RateTable:
    """Load rate cards from a JSON file with a top-level ``cards`` list."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    table = RateTable.model_validate(data)
    logger.info(f"Loaded {len(table.cards)} rate cards from {path}")
    return table
