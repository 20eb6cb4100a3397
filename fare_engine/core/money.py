"""Decimal helpers for monetary amounts."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
WHOLE = Decimal("1")
ZERO = Decimal("0.00")


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    # str() keeps float inputs like 0.05 from turning into 0.05000000000000000277
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal | float | int | str) -> Decimal:
    """Quantize to two decimal places, half away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def round_total(value: Decimal | float | int | str) -> Decimal:
    """Round to the nearest whole currency unit for display."""
    return to_decimal(value).quantize(WHOLE, rounding=ROUND_HALF_UP)


def km_charge(distance_km: float, rate: Decimal) -> Decimal:
    """Multiply a distance by a per-km rate and round to cents."""
    return round_money(to_decimal(distance_km) * rate)
