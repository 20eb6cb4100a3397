"""Standardized exception hierarchy for the fare engine."""

from typing import Any


class FareEngineError(Exception):
    """Base exception for all fare engine errors."""

    code: str = "FARE_ENGINE_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransientError(FareEngineError):
    """Errors that may succeed on retry."""

    pass


class PersistenceError(TransientError):
    """Database or state persistence failed."""

    code = "PERSISTENCE_FAILED"


class PermanentError(FareEngineError):
    """Errors that will not succeed on retry."""

    pass


class ValidationError(PermanentError):
    """Invalid input or data format."""

    code = "VALIDATION_FAILED"


class NotFoundError(PermanentError):
    """Requested entity does not exist."""

    code = "NOT_FOUND"


class StateError(PermanentError):
    """Invalid state transition."""

    code = "INVALID_STATE"


class TripStateError(StateError):
    """Trip is not in a state that allows completion."""

    def __init__(self, trip_id: str, status: str):
        super().__init__(
            f"Trip {trip_id} cannot be completed from status '{status}'",
            details={"trip_id": trip_id, "status": status},
        )
        self.trip_id = trip_id
        self.status = status


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    code = "CONFIGURATION_ERROR"


class RateConfigMissingError(ConfigurationError):
    """No slab table and no per-km fallback for a vehicle/booking pair."""

    code = "RATE_CONFIG_MISSING"

    def __init__(self, vehicle_type: str, booking_type: str):
        super().__init__(
            f"No rate configuration for vehicle '{vehicle_type}' and booking '{booking_type}'",
            details={"vehicle_type": vehicle_type, "booking_type": booking_type},
        )


class InsufficientGPSDataError(PermanentError):
    """Fewer than two usable fixes and the trip was not stationary."""

    code = "INSUFFICIENT_GPS_DATA"

    def __init__(self, fix_count: int, trip_id: str | None = None):
        super().__init__(
            f"Only {fix_count} GPS fix(es) recorded; cannot compute trip distance",
            details={"fix_count": fix_count, "trip_id": trip_id},
        )
        self.fix_count = fix_count


class TripCompletionPersistenceError(PermanentError):
    """The store rejected a completed fare breakdown.

    Callers must surface ``alert_message`` to the driver as a blocking alert.
    """

    code = "COMPLETION_NOT_SAVED"

    def __init__(self, trip_id: str, reason: str):
        super().__init__(
            f"Failed to store completion for trip {trip_id}: {reason}",
            details={"trip_id": trip_id, "reason": reason},
        )
        self.trip_id = trip_id
        self.reason = reason

    @property
    def alert_message(self) -> str:
        return (
            f"Trip {self.trip_id} was not saved. The fare could not be recorded; "
            "please contact support before starting another trip."
        )
