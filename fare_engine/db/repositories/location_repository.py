"""Location history repository for trip GPS fixes."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fare_engine.tracking.models import TripFix

from ..schema import TripLocation
from ..utils import ensure_utc


class LocationHistoryRepository:
    """Repository for the trip_location_history table."""

    def __init__(self, session: Session):
        self.session = session

    def add_fix(self, trip_id: str, fix: TripFix) -> None:
        """Record one GPS fix for a trip."""
        self.session.add(
            TripLocation(
                trip_id=trip_id,
                latitude=fix.latitude,
                longitude=fix.longitude,
                speed_kmh=fix.speed_kmh,
                accuracy_m=fix.accuracy_m,
                recorded_at=fix.recorded_at,
            )
        )

    def add_fixes(self, trip_id: str, fixes: list[TripFix]) -> None:
        for fix in fixes:
            self.add_fix(trip_id, fix)

    def list_fixes(self, trip_id: str) -> list[TripFix]:
        """All fixes for a trip, oldest first."""
        stmt = (
            select(TripLocation)
            .where(TripLocation.trip_id == trip_id)
            .order_by(TripLocation.recorded_at, TripLocation.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [
            TripFix(
                latitude=row.latitude,
                longitude=row.longitude,
                recorded_at=ensure_utc(row.recorded_at),
                speed_kmh=row.speed_kmh,
                accuracy_m=row.accuracy_m,
            )
            for row in rows
        ]

    def count_fixes(self, trip_id: str) -> int:
        stmt = select(func.count()).select_from(TripLocation).where(TripLocation.trip_id == trip_id)
        return self.session.execute(stmt).scalar_one()
