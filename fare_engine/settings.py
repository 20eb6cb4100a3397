from decimal import Decimal
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BOOKING_TYPES = ("outstation", "rental", "airport", "regular")


class EngineSettings(BaseSettings):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"

    gst_charges_rate: Decimal = Field(
        default=Decimal("0.05"),
        ge=0,
        le=1,
        description="GST applied to ride charges (base, distance, surcharges)",
    )
    gst_platform_rate: Decimal = Field(
        default=Decimal("0.18"),
        ge=0,
        le=1,
        description="GST applied to the platform fee",
    )
    default_trip_direction: Literal["one_way", "round_trip"] = Field(
        default="one_way",
        description="Direction assumed for outstation bookings with no trip direction recorded",
    )

    rate_table_path: str = Field(default="config/rates.json")
    zones_path: str = Field(default="config/zones.json")

    model_config = SettingsConfigDict(env_prefix="FARE_")


class TrackingSettings(BaseSettings):
    """GPS jump filtering and tracking validation thresholds."""

    normal_segment_km: float = Field(
        default=0.2,
        gt=0.0,
        description="Segments shorter than this are always kept",
    )
    highway_segment_km: float = Field(default=0.5, gt=0.0)
    highway_max_speed_kmh: float = Field(default=120.0, gt=0.0)
    throttled_segment_km: float = Field(default=1.0, gt=0.0)
    throttled_min_gap_seconds: float = Field(
        default=30.0,
        ge=0.0,
        description="Minimum gap between fixes for a long segment to count as throttled sampling",
    )
    throttled_max_speed_kmh: float = Field(default=150.0, gt=0.0)

    stationary_threshold_km: float = Field(
        default=0.1,
        gt=0.0,
        description="Start/end closer than this with too few fixes is a stationary trip",
    )
    stationary_distance_km: float = Field(default=0.1, ge=0.0)
    stationary_duration_minutes: int = Field(default=1, ge=0)

    incomplete_ratio: float = Field(
        default=0.5,
        gt=0.0,
        description="GPS distance below this share of straight-line distance is flagged",
    )
    erratic_ratio: float = Field(
        default=3.0,
        gt=1.0,
        description="GPS distance above this multiple of straight-line distance is flagged",
    )
    stale_fix_minutes: float = Field(default=5.0, gt=0.0)

    model_config = SettingsConfigDict(env_prefix="TRACKING_")

    @model_validator(mode="after")
    def validate_tiers_ascending(self) -> "TrackingSettings":
        if not (self.normal_segment_km <= self.highway_segment_km <= self.throttled_segment_km):
            raise ValueError(
                "Segment tiers must be ascending: "
                f"normal={self.normal_segment_km}, highway={self.highway_segment_km}, "
                f"throttled={self.throttled_segment_km}"
            )
        return self


class DeadheadSettings(BaseSettings):
    """Deadhead (return compensation) policy.

    Which ring(s) trigger the charge is an open product decision, so the
    strategy is selected here rather than fixed in code.
    """

    strategy: Literal["ring-band-only", "any-ring", "inner-ring-only"] = "ring-band-only"
    charge_mode: Literal["flat", "half_return_distance"] = "flat"
    flat_charge: Decimal = Field(default=Decimal("100.00"), ge=0)
    booking_types: list[str] = Field(
        default_factory=lambda: ["regular", "rental", "airport"],
        description="Booking types that are evaluated for a deadhead charge",
    )

    model_config = SettingsConfigDict(env_prefix="DEADHEAD_")

    @field_validator("booking_types")
    @classmethod
    def validate_booking_types(cls, v: list[str]) -> list[str]:
        unknown = [b for b in v if b not in BOOKING_TYPES]
        if unknown:
            raise ValueError(f"Unknown booking types: {', '.join(unknown)}")
        return v


class RetrySettings(BaseSettings):
    """Retry policy for persisting completions."""

    max_attempts: int = Field(default=3, ge=1, le=10)
    base_delay: float = Field(default=0.5, ge=0.0, le=5.0)
    multiplier: float = Field(default=2.0, ge=1.0, le=5.0)

    model_config = SettingsConfigDict(env_prefix="RETRY_")


class DatabaseSettings(BaseSettings):
    url: str = "sqlite:///fare_engine.db"

    model_config = SettingsConfigDict(env_prefix="DB_")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if "://" not in v:
            raise ValueError("Database URL must include a scheme, e.g. sqlite:///path.db")
        return v


class Settings(BaseSettings):
    engine: EngineSettings = Field(default_factory=EngineSettings)
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    deadhead: DeadheadSettings = Field(default_factory=DeadheadSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
