"""Per-thread trip context attached to every log record.

The completion flow wraps each trip in ``log_trip_context`` so every line
logged while pricing it carries the trip, driver and booking fields.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

TRIP_FIELDS = (
    "trip_id",
    "driver_id",
    "booking_type",
    "vehicle_type",
    "correlation_id",
)
UNSET = "-"

_state = threading.local()


def current_context() -> dict[str, Any]:
    """Fields bound on this thread."""
    return dict(getattr(_state, "fields", {}))


def clear_context() -> None:
    _state.fields = {}


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind fields for the duration of the block.

    Contexts nest: leaving an inner block restores the outer fields.
    """
    previous = current_context()
    _state.fields = {**previous, **fields}
    try:
        yield
    finally:
        _state.fields = previous


@contextmanager
def log_trip_context(
    trip_id: str,
    *,
    driver_id: str | None = None,
    booking_type: str | None = None,
    vehicle_type: str | None = None,
    correlation_id: str | None = None,
) -> Iterator[None]:
    """Bind one trip's identity. The trip id doubles as the correlation id."""
    fields = {
        "trip_id": trip_id,
        "driver_id": driver_id,
        "booking_type": booking_type,
        "vehicle_type": vehicle_type,
        "correlation_id": correlation_id or trip_id,
    }
    with log_context(**{k: v for k, v in fields.items() if v is not None}):
        yield


class ContextFilter(logging.Filter):
    """Copies bound fields onto records; unbound trip fields become "-"."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in current_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        for key in TRIP_FIELDS:
            if not hasattr(record, key):
                setattr(record, key, UNSET)
        return True
