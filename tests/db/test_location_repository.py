from datetime import timedelta

from fare_engine.db.repositories import LocationHistoryRepository, TripRepository
from tests.factories import HOSUR, T0, make_fix, straight_path, trip_context


class TestLocationHistoryRepository:
    def test_list_fixes_ordered(self, session_factory):
        early = make_fix(HOSUR, T0, speed_kmh=30.0)
        late = make_fix(HOSUR, T0 + timedelta(seconds=10))
        with session_factory() as session:
            TripRepository(session).create(trip_context())
            repo = LocationHistoryRepository(session)
            repo.add_fix("trip-001", late)
            repo.add_fix("trip-001", early)
            session.commit()

        with session_factory() as session:
            fixes = LocationHistoryRepository(session).list_fixes("trip-001")

        assert fixes == [early, late]
        assert fixes[0].speed_kmh == 30.0

    def test_count_fixes(self, session_factory):
        with session_factory() as session:
            TripRepository(session).create(trip_context())
            LocationHistoryRepository(session).add_fixes("trip-001", straight_path(HOSUR, 1.0))
            session.commit()

        with session_factory() as session:
            repo = LocationHistoryRepository(session)
            assert repo.count_fixes("trip-001") == 11
            assert repo.count_fixes("other") == 0

    def test_fixes_scoped_to_trip(self, session_factory):
        with session_factory() as session:
            repo = LocationHistoryRepository(session)
            repo.add_fixes("trip-a", straight_path(HOSUR, 0.5))
            repo.add_fixes("trip-b", straight_path(HOSUR, 1.0))
            session.commit()

            assert len(repo.list_fixes("trip-a")) == 6
            assert repo.list_fixes("trip-c") == []
