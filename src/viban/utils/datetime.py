"""Utilities for datetime handling."""

from datetime import UTC, datetime, timedelta


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    """Convert datetime to ISO format string."""
    return ensure_utc(dt).isoformat()


def from_iso(value: str) -> datetime:
    """Parse ISO format string to datetime."""
    # Handle both 'Z' suffix and explicit timezone
    return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def next_timestamp(previous: datetime) -> datetime:
    """Current time, bumped past ``previous`` if the clock has not advanced."""
    now = now_utc()
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now
