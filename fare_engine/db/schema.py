"""SQLAlchemy ORM models for trips, location history and completions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .utils import utc_now

Money = Numeric(12, 2, asdecimal=True)


class Base(DeclarativeBase):
    pass


class Trip(Base):
    __tablename__ = "trips"

    trip_id: Mapped[str] = mapped_column(String, primary_key=True)
    driver_id: Mapped[str] = mapped_column(String, nullable=False)
    customer_id: Mapped[str | None] = mapped_column(String, nullable=True)
    booking_type: Mapped[str] = mapped_column(String, nullable=False)
    vehicle_type: Mapped[str] = mapped_column(String, nullable=False)
    trip_direction: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False)
    pickup_lat: Mapped[float] = mapped_column(Float, nullable=False)
    pickup_lon: Mapped[float] = mapped_column(Float, nullable=False)
    destination_lat: Mapped[float] = mapped_column(Float, nullable=False)
    destination_lon: Mapped[float] = mapped_column(Float, nullable=False)
    rental_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: utc_now(),
        onupdate=lambda: utc_now(),
    )

    __table_args__ = (
        Index("idx_trip_status", "status"),
        Index("idx_trip_driver", "driver_id"),
    )


class TripLocation(Base):
    __tablename__ = "trip_location_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[str] = mapped_column(ForeignKey("trips.trip_id"), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    speed_kmh: Mapped[float | None] = mapped_column(Float, nullable=True)
    accuracy_m: Mapped[float | None] = mapped_column(Float, nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("idx_location_trip_time", "trip_id", "recorded_at"),)


class TripCompletion(Base):
    __tablename__ = "trip_completions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[str] = mapped_column(
        ForeignKey("trips.trip_id"), nullable=False, unique=True
    )
    driver_id: Mapped[str] = mapped_column(String, nullable=False)
    booking_type: Mapped[str] = mapped_column(String, nullable=False)
    vehicle_type: Mapped[str] = mapped_column(String, nullable=False)
    pricing_method: Mapped[str] = mapped_column(String, nullable=False)
    billing_distance_km: Mapped[float] = mapped_column(Float, nullable=False)
    tracked_distance_km: Mapped[float] = mapped_column(Float, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    distance_source: Mapped[str | None] = mapped_column(String, nullable=True)
    base_fare: Mapped[Decimal] = mapped_column(Money, nullable=False)
    distance_fare: Mapped[Decimal] = mapped_column(Money, nullable=False)
    hourly_charges: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    driver_allowance: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    extra_km_charges: Mapped[Decimal] = mapped_column(Money, nullable=False)
    deadhead_charge: Mapped[Decimal] = mapped_column(Money, nullable=False)
    platform_fee: Mapped[Decimal] = mapped_column(Money, nullable=False)
    gst_on_charges: Mapped[Decimal] = mapped_column(Money, nullable=False)
    gst_on_platform_fee: Mapped[Decimal] = mapped_column(Money, nullable=False)
    total_fare: Mapped[Decimal] = mapped_column(Money, nullable=False)
    fare_details: Mapped[str] = mapped_column(Text, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: utc_now()
    )

    __table_args__ = (
        Index("idx_completion_driver", "driver_id"),
        Index("idx_completion_booking_type", "booking_type"),
    )
