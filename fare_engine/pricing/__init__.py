from .aggregator import FareAggregator
from .breakdown import FareBreakdown, PricingMethod
from .deadhead import DeadheadEvaluator, DeadheadResult, DeadheadStrategy, DropoffPoint, select_dropoff
from .normalizer import DEFAULT_TRIP_DIRECTION, normalize_billing_distance
from .rates import PlatformFee, RateCard, RateSlab, RateTable, load_rate_table
from .resolver import RateQuote, RateResolver, select_slab

__all__ = [
    "DEFAULT_TRIP_DIRECTION",
    "DeadheadEvaluator",
    "DeadheadResult",
    "DeadheadStrategy",
    "DropoffPoint",
    "FareAggregator",
    "FareBreakdown",
    "PlatformFee",
    "PricingMethod",
    "RateCard",
    "RateQuote",
    "RateResolver",
    "RateSlab",
    "RateTable",
    "load_rate_table",
    "normalize_billing_distance",
    "select_dropoff",
    "select_slab",
]
