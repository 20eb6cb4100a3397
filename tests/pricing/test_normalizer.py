import pytest

from fare_engine.core.exceptions import ValidationError
from fare_engine.pricing.normalizer import DEFAULT_TRIP_DIRECTION, normalize_billing_distance
from fare_engine.trip import BookingType, TripDirection


@pytest.mark.unit
class TestNormalizeBillingDistance:
    def test_one_way_outstation_doubled(self):
        assert normalize_billing_distance(45.0, BookingType.OUTSTATION, TripDirection.ONE_WAY) == 90.0

    def test_round_trip_unchanged(self):
        result = normalize_billing_distance(90.0, "outstation", "round_trip")
        assert result == 90.0

    def test_missing_direction_uses_default(self):
        assert DEFAULT_TRIP_DIRECTION == TripDirection.ONE_WAY
        assert normalize_billing_distance(10.0, "outstation", None) == 20.0

    def test_default_direction_is_overridable(self):
        result = normalize_billing_distance(
            10.0, "outstation", None, default_direction=TripDirection.ROUND_TRIP
        )
        assert result == 10.0

    @pytest.mark.parametrize("booking_type", ["rental", "airport", "regular"])
    def test_other_bookings_unchanged(self, booking_type):
        assert normalize_billing_distance(12.5, booking_type, TripDirection.ONE_WAY) == 12.5

    def test_doubling_is_monotonic(self):
        distances = [0.0, 0.1, 5.0, 45.0, 60.0, 65.0]
        billed = [normalize_billing_distance(d, "outstation", "one_way") for d in distances]
        assert billed == sorted(billed)

    def test_negative_distance_rejected(self):
        with pytest.raises(ValidationError):
            normalize_billing_distance(-1.0, "outstation", "one_way")

    def test_unknown_booking_type_rejected(self):
        with pytest.raises(ValueError):
            normalize_billing_distance(1.0, "helicopter", None)
