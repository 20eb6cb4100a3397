"""Ordered fix data sources with inspectable fallback.

A trip's fixes may come from the location-history store or from a
device-local cache. Each source is tried in order and every attempt is
recorded, so the source that supplied the billed distance is always known.
No source ever synthesises fixes from a routing estimate.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from fare_engine.core.exceptions import PersistenceError, TransientError
from fare_engine.db.repositories.location_repository import LocationHistoryRepository

from .models import TripFix

logger = logging.getLogger(__name__)

MIN_FIXES = 2


class FixSource(Protocol):
    name: str

    def fetch(self, trip_id: str) -> list[TripFix]: ...


@dataclass(frozen=True)
class SourceAttempt:
    source: str
    ok: bool
    fix_count: int
    error: str | None = None


@dataclass(frozen=True)
class FixResolution:
    fixes: tuple[TripFix, ...]
    source: str | None
    attempts: tuple[SourceAttempt, ...] = field(default_factory=tuple)


class LocationHistorySource:
    """Fixes from the trip_location_history table."""

    name = "location_history"

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory

    def fetch(self, trip_id: str) -> list[TripFix]:
        try:
            with self.session_factory() as session:
                return LocationHistoryRepository(session).list_fixes(trip_id)
        except OperationalError as e:
            raise PersistenceError(
                f"Location history unavailable for trip {trip_id}",
                details={"trip_id": trip_id, "error": str(e.orig)},
            ) from e


class CachedFixSource:
    """Fixes buffered on the device while the store was unreachable."""

    name = "device_cache"

    def __init__(self) -> None:
        self._cache: dict[str, list[TripFix]] = {}

    def append(self, trip_id: str, fix: TripFix) -> None:
        self._cache.setdefault(trip_id, []).append(fix)

    def fetch(self, trip_id: str) -> list[TripFix]:
        return sorted(self._cache.get(trip_id, []), key=lambda f: f.recorded_at)

    def clear(self, trip_id: str) -> None:
        self._cache.pop(trip_id, None)


def resolve_fixes(trip_id: str, sources: Iterable[FixSource]) -> FixResolution:
    """Try each source in order until one yields enough fixes.

    When no source has at least two fixes, the largest partial result is
    returned with ``source`` set to the source that produced it (or None when
    every source was empty), leaving the stationary/insufficient decision to
    the reducer.
    """
    attempts: list[SourceAttempt] = []
    best: Sequence[TripFix] = ()
    best_source: str | None = None

    for source in sources:
        try:
            fixes = source.fetch(trip_id)
        except TransientError as e:
            logger.warning(f"Fix source '{source.name}' failed for trip {trip_id}: {e}")
            attempts.append(SourceAttempt(source=source.name, ok=False, fix_count=0, error=str(e)))
            continue

        ok = len(fixes) >= MIN_FIXES
        attempts.append(SourceAttempt(source=source.name, ok=ok, fix_count=len(fixes)))
        if ok:
            logger.info(f"Using {len(fixes)} fixes from '{source.name}' for trip {trip_id}")
            return FixResolution(fixes=tuple(fixes), source=source.name, attempts=tuple(attempts))

        if len(fixes) > len(best):
            best = fixes
            best_source = source.name

    logger.warning(
        f"No source had {MIN_FIXES}+ fixes for trip {trip_id}; "
        f"best was {len(best)} from {best_source or 'none'}"
    )
    return FixResolution(fixes=tuple(best), source=best_source, attempts=tuple(attempts))
