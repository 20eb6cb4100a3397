"""Exponential-backoff retry for transient store failures."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from .exceptions import TransientError

T = TypeVar("T")
logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    max_attempts: int = 3
    base_delay: float = 0.5
    multiplier: float = 2.0
    max_delay: float = 30.0
    retryable_exceptions: tuple[type[Exception], ...] = field(
        default_factory=lambda: (TransientError,)
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the zero-based ``attempt`` failed."""
        return min(self.base_delay * self.multiplier**attempt, self.max_delay)


def with_retry_sync(
    operation: Callable[[], T],
    config: RetryConfig | None = None,
    operation_name: str = "operation",
    on_retry: Callable[[Exception, int], None] | None = None,
) -> T:
    """Run ``operation``, retrying retryable errors with backoff.

    Errors outside ``config.retryable_exceptions`` propagate on the first
    attempt. Once attempts run out the last retryable error is re-raised.
    """
    config = config or RetryConfig()
    attempt = 0

    while True:
        try:
            return operation()
        except config.retryable_exceptions as e:
            if attempt + 1 >= config.max_attempts:
                logger.error(f"{operation_name} gave up after {config.max_attempts} attempts: {e}")
                raise

            delay = config.delay_for(attempt)
            logger.warning(
                f"{operation_name} attempt {attempt + 1}/{config.max_attempts} failed, "
                f"retrying in {delay:.1f}s: {e}"
            )
            if on_retry is not None:
                on_retry(e, attempt)

            time.sleep(delay)
            attempt += 1
