import pytest

from fare_engine.core.exceptions import TripStateError
from fare_engine.db.repositories import TripRepository
from fare_engine.db.repositories.trip_repository import to_trip_context
from fare_engine.trip import BookingType, TripDirection, TripStatus
from tests.factories import HOSUR, trip_context


class TestTripRepository:
    def test_create_and_get(self, session_factory):
        with session_factory() as session:
            TripRepository(session).create(trip_context())
            session.commit()

        with session_factory() as session:
            trip = TripRepository(session).get("trip-001")
            assert trip is not None
            assert trip.status == "in_progress"
            assert trip.booking_type == "outstation"
            assert trip.trip_direction == "one_way"
            assert (trip.pickup_lat, trip.pickup_lon) == HOSUR
            assert trip.started_at is not None

    def test_get_missing(self, session_factory):
        with session_factory() as session:
            assert TripRepository(session).get("nope") is None

    def test_to_trip_context_round_trip(self, session_factory):
        original = trip_context(
            booking_type=BookingType.RENTAL, trip_direction=None, rental_hours=4.0
        )
        with session_factory() as session:
            TripRepository(session).create(original)
            session.commit()

        with session_factory() as session:
            restored = to_trip_context(TripRepository(session).get("trip-001"))

        assert restored == original

    def test_to_trip_context_keeps_direction(self, session_factory):
        with session_factory() as session:
            TripRepository(session).create(trip_context(trip_direction=TripDirection.ROUND_TRIP))
            session.commit()
            restored = to_trip_context(TripRepository(session).get("trip-001"))

        assert restored.trip_direction == TripDirection.ROUND_TRIP


class TestMarkCompleted:
    def test_flips_status(self, session_factory):
        with session_factory() as session:
            repo = TripRepository(session)
            repo.create(trip_context())
            session.commit()
            repo.mark_completed("trip-001")
            session.commit()

        with session_factory() as session:
            trip = TripRepository(session).get("trip-001")
            assert trip.status == "completed"
            assert trip.completed_at is not None

    def test_only_in_progress_trips(self, session_factory):
        with session_factory() as session:
            repo = TripRepository(session)
            repo.create(trip_context(), status=TripStatus.CANCELLED)
            session.commit()

            with pytest.raises(TripStateError) as exc_info:
                repo.mark_completed("trip-001")

        assert exc_info.value.status == "cancelled"

    def test_twice_raises(self, session_factory):
        with session_factory() as session:
            repo = TripRepository(session)
            repo.create(trip_context())
            session.commit()
            repo.mark_completed("trip-001")
            session.commit()

            with pytest.raises(TripStateError):
                repo.mark_completed("trip-001")

    def test_missing_trip(self, session_factory):
        with session_factory() as session:
            with pytest.raises(TripStateError) as exc_info:
                TripRepository(session).mark_completed("nope")

        assert exc_info.value.status == "missing"
