"""Transaction utilities for explicit transaction boundaries."""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def transaction(session: Session) -> Generator[Session]:
    """Context manager for explicit transaction boundaries.

    Commits on successful completion, rolls back on any exception.
    Storing a completion and flipping the trip to completed must succeed
    or fail together.

    Example:
        with transaction(session):
            completion_repo.save(trip, breakdown)
            trip_repo.mark_completed(trip.trip_id)
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
