"""Fare computation for completed ride-hailing trips."""

from .config import FareConfig, load_fare_config
from .engine import FareEngine
from .pricing.breakdown import FareBreakdown, PricingMethod
from .trip import BookingType, TripContext, TripDirection, TripStatus

__version__ = "0.1.0"

__all__ = [
    "BookingType",
    "FareBreakdown",
    "FareConfig",
    "FareEngine",
    "PricingMethod",
    "TripContext",
    "TripDirection",
    "TripStatus",
    "load_fare_config",
]
