from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on read; stored datetimes are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
