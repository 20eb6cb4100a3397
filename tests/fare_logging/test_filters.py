"""Tests for logging filters."""

import logging

import pytest

from fare_engine.fare_logging import PIIFilter, mask_pii


@pytest.fixture
def make_record():
    """Factory for creating log records with specific messages."""

    def _make_record(msg: str) -> logging.LogRecord:
        return logging.LogRecord(
            name="test.logger",
            level=logging.INFO,
            pathname="test.py",
            lineno=10,
            msg=msg,
            args=(),
            exc_info=None,
        )

    return _make_record


@pytest.mark.unit
class TestPIIFilter:
    @pytest.fixture
    def pii_filter(self):
        return PIIFilter()

    def test_masks_email(self, pii_filter, make_record):
        record = make_record("receipt sent to rider@example.com")
        pii_filter.filter(record)

        assert "[EMAIL]" in record.msg
        assert "rider@example.com" not in record.msg

    @pytest.mark.parametrize("phone", ["9876543210", "+91 98765 43210", "+91-9876543210"])
    def test_masks_indian_mobile(self, pii_filter, make_record, phone):
        record = make_record(f"driver phone {phone} on trip")
        pii_filter.filter(record)

        assert "[PHONE]" in record.msg
        assert phone not in record.msg

    def test_leaves_fares_and_coordinates(self, pii_filter, make_record):
        msg = "Fare 2322 at 12.7401984,77.824 after 90.00km"
        record = make_record(msg)
        pii_filter.filter(record)

        assert record.msg == msg

    def test_always_returns_true(self, pii_filter, make_record):
        assert pii_filter.filter(make_record("x@y.com")) is True

    @pytest.mark.parametrize("plate", ["KA 01 AB 1234", "TN09BX4321", "KA-05-MN-0042"])
    def test_masks_vehicle_plate(self, pii_filter, make_record, plate):
        record = make_record(f"vehicle {plate} assigned")
        pii_filter.filter(record)

        assert record.msg == "vehicle [PLATE] assigned"

    def test_masks_string_args(self, pii_filter, make_record):
        record = make_record("receipt for %s on trip %s")
        record.args = ("rider@example.com", "trip-1")
        pii_filter.filter(record)

        assert record.getMessage() == "receipt for [EMAIL] on trip trip-1"

    def test_leaves_numeric_args(self, pii_filter, make_record):
        record = make_record("total %d")
        record.args = (9876543210,)
        pii_filter.filter(record)

        assert record.args == (9876543210,)


@pytest.mark.unit
class TestMaskPII:
    def test_masks_everything_in_one_line(self):
        masked = mask_pii("driver 9876543210 in KA 01 AB 1234, mail d@x.in")
        assert masked == "driver [PHONE] in [PLATE], mail [EMAIL]"

    def test_plain_text_unchanged(self):
        line = "Trip trip-001 completed: total 2322"
        assert mask_pii(line) == line
