from decimal import Decimal

import pytest
from pydantic import ValidationError

from fare_engine.settings import (
    DatabaseSettings,
    DeadheadSettings,
    EngineSettings,
    RetrySettings,
    Settings,
    TrackingSettings,
    get_settings,
)


@pytest.mark.unit
class TestEngineSettings:
    def test_defaults(self):
        settings = EngineSettings()
        assert settings.log_level == "INFO"
        assert settings.gst_charges_rate == Decimal("0.05")
        assert settings.gst_platform_rate == Decimal("0.18")
        assert settings.default_trip_direction == "one_way"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FARE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("FARE_DEFAULT_TRIP_DIRECTION", "round_trip")
        monkeypatch.setenv("FARE_GST_CHARGES_RATE", "0.12")

        settings = EngineSettings()
        assert settings.log_level == "DEBUG"
        assert settings.default_trip_direction == "round_trip"
        assert settings.gst_charges_rate == Decimal("0.12")

    def test_validation(self):
        with pytest.raises(ValidationError):
            EngineSettings(gst_charges_rate=Decimal("1.5"))

        with pytest.raises(ValidationError):
            EngineSettings(default_trip_direction="sideways")


@pytest.mark.unit
class TestTrackingSettings:
    def test_defaults(self):
        settings = TrackingSettings()
        assert settings.normal_segment_km == 0.2
        assert settings.highway_segment_km == 0.5
        assert settings.throttled_segment_km == 1.0
        assert settings.stationary_distance_km == 0.1

    def test_tiers_must_ascend(self):
        with pytest.raises(ValidationError):
            TrackingSettings(normal_segment_km=0.6, highway_segment_km=0.5)

    def test_erratic_ratio_above_one(self):
        with pytest.raises(ValidationError):
            TrackingSettings(erratic_ratio=1.0)


@pytest.mark.unit
class TestDeadheadSettings:
    def test_defaults(self):
        settings = DeadheadSettings()
        assert settings.strategy == "ring-band-only"
        assert settings.charge_mode == "flat"
        assert settings.flat_charge == Decimal("100.00")
        assert settings.booking_types == ["regular", "rental", "airport"]

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("DEADHEAD_STRATEGY", "any-ring")
        monkeypatch.setenv("DEADHEAD_BOOKING_TYPES", '["regular"]')

        settings = DeadheadSettings()
        assert settings.strategy == "any-ring"
        assert settings.booking_types == ["regular"]

    def test_unknown_booking_type_rejected(self):
        with pytest.raises(ValidationError):
            DeadheadSettings(booking_types=["regular", "helicopter"])

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValidationError):
            DeadheadSettings(strategy="everywhere")


@pytest.mark.unit
class TestRetryAndDatabaseSettings:
    def test_retry_defaults(self):
        settings = RetrySettings()
        assert settings.max_attempts == 3
        assert settings.base_delay == 0.5

    def test_retry_bounds(self):
        with pytest.raises(ValidationError):
            RetrySettings(max_attempts=0)

    def test_database_url_requires_scheme(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(url="fare_engine.db")


@pytest.mark.unit
class TestSettings:
    def test_nested_env(self, monkeypatch):
        monkeypatch.setenv("DEADHEAD__CHARGE_MODE", "half_return_distance")
        monkeypatch.setenv("TRACKING__STALE_FIX_MINUTES", "10")

        settings = Settings()
        assert settings.deadhead.charge_mode == "half_return_distance"
        assert settings.tracking.stale_fix_minutes == 10.0

    def test_get_settings_returns_fresh_instance(self):
        assert get_settings() is not get_settings()
