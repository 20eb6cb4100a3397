"""Trip completion: load, price, persist.

This is the only place the engine meets storage. A trip is priced at most
once: the status guard is checked before pricing and enforced again by the
conditional update that marks it completed.
"""

import logging
from collections.abc import Callable, Sequence

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from fare_engine.config import FareConfig
from fare_engine.core.exceptions import (
    NotFoundError,
    PersistenceError,
    TripCompletionPersistenceError,
    TripStateError,
)
from fare_engine.core.retry import RetryConfig, with_retry_sync
from fare_engine.db.repositories import TripCompletionRepository, TripRepository
from fare_engine.db.repositories.trip_repository import to_trip_context
from fare_engine.db.transaction import transaction
from fare_engine.db.utils import utc_now
from fare_engine.engine import FareEngine
from fare_engine.fare_logging import log_trip_context
from fare_engine.pricing.breakdown import FareBreakdown
from fare_engine.settings import RetrySettings
from fare_engine.tracking.health import GPSHealthStatus, check_gps_health
from fare_engine.tracking.models import TripFix
from fare_engine.tracking.sources import FixSource, resolve_fixes
from fare_engine.trip import TripContext, TripStatus

logger = logging.getLogger(__name__)


class TripCompletionService:
    """Completes in-progress trips and stores their fares."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        config: FareConfig,
        sources: Sequence[FixSource],
        retry_settings: RetrySettings | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.config = config
        self.sources = tuple(sources)
        self.engine = FareEngine(config)

        retry = retry_settings or RetrySettings()
        self.retry_config = RetryConfig(
            max_attempts=retry.max_attempts,
            base_delay=retry.base_delay,
            multiplier=retry.multiplier,
            retryable_exceptions=(PersistenceError,),
        )

    def complete_trip(self, trip_id: str) -> FareBreakdown:
        """Price and store one trip.

        Raises:
            NotFoundError: unknown trip
            TripStateError: trip is not in progress
            InsufficientGPSDataError: not enough fixes to bill a moving trip
            RateConfigMissingError: no usable rate for the trip
            TripCompletionPersistenceError: the fare was computed but not stored
        """
        trip = self._load_trip(trip_id)

        with log_trip_context(
            trip.trip_id,
            driver_id=trip.driver_id,
            booking_type=trip.booking_type.value,
            vehicle_type=trip.vehicle_type,
        ):
            resolution = resolve_fixes(trip.trip_id, self.sources)
            self._log_gps_health(resolution.fixes)

            breakdown = self.engine.calculate(
                trip, resolution.fixes, distance_source=resolution.source
            )
            self._persist(trip, breakdown)

            logger.info(f"Trip {trip.trip_id} completed: total {breakdown.total_fare}")
            return breakdown

    def _load_trip(self, trip_id: str) -> TripContext:
        with self.session_factory() as session:
            row = TripRepository(session).get(trip_id)
            if row is None:
                raise NotFoundError(f"Trip {trip_id} not found", details={"trip_id": trip_id})
            if row.status != TripStatus.IN_PROGRESS.value:
                raise TripStateError(trip_id, row.status)
            return to_trip_context(row)

    def _log_gps_health(self, fixes: Sequence[TripFix]) -> None:
        health = check_gps_health(
            fixes, utc_now(), stale_after_minutes=self.config.tracking.stale_fix_minutes
        )
        if health.status == GPSHealthStatus.OK:
            logger.debug(f"GPS health ok: {health.fix_count} fixes")
        else:
            logger.warning(
                f"GPS health {health.status.value}: {health.fix_count} fixes, "
                f"last fix {health.minutes_since_last_fix or 0:.1f} min ago"
            )

    def _persist(self, trip: TripContext, breakdown: FareBreakdown) -> None:
        def save() -> None:
            try:
                with self.session_factory() as session, transaction(session):
                    TripCompletionRepository(session).save(trip, breakdown)
                    TripRepository(session).mark_completed(trip.trip_id)
            except OperationalError as e:
                raise PersistenceError(
                    f"Store unavailable while completing trip {trip.trip_id}",
                    details={"trip_id": trip.trip_id, "error": str(e.orig)},
                ) from e

        try:
            with_retry_sync(
                save,
                config=self.retry_config,
                operation_name=f"save_completion({trip.trip_id})",
            )
        except PersistenceError as e:
            error = TripCompletionPersistenceError(trip.trip_id, e.message)
            logger.error(error.alert_message)
            raise error from e
        except TripCompletionPersistenceError as e:
            logger.error(e.alert_message)
            raise
