from .exceptions import (
    ConfigurationError,
    FareEngineError,
    InsufficientGPSDataError,
    NotFoundError,
    PermanentError,
    PersistenceError,
    RateConfigMissingError,
    StateError,
    TransientError,
    TripCompletionPersistenceError,
    TripStateError,
    ValidationError,
)
from .retry import RetryConfig, with_retry_sync

__all__ = [
    "ConfigurationError",
    "FareEngineError",
    "InsufficientGPSDataError",
    "NotFoundError",
    "PermanentError",
    "PersistenceError",
    "RateConfigMissingError",
    "RetryConfig",
    "StateError",
    "TransientError",
    "TripCompletionPersistenceError",
    "TripStateError",
    "ValidationError",
    "with_retry_sync",
]
