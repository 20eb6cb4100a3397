"""Logging module with structured formatters, PII filtering, and trip context."""

from .context import (
    ContextFilter,
    clear_context,
    current_context,
    log_context,
    log_trip_context,
)
from .filters import PIIFilter, mask_pii
from .formatters import DevFormatter, JSONFormatter
from .setup import get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_context",
    "log_trip_context",
    "current_context",
    "clear_context",
    "JSONFormatter",
    "DevFormatter",
    "PIIFilter",
    "mask_pii",
    "ContextFilter",
]
