"""Conversions between integer epoch timestamps and instants.

Instants are timezone-aware UTC datetimes truncated to whole seconds.
Negative timestamps (pre-1970 dates) are supported on every platform by
offsetting from the epoch instead of calling `datetime.fromtimestamp`.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def instant_from_timestamp(timestamp: int) -> datetime:
    """Convert signed seconds since the epoch to a UTC instant.

    Args:
        timestamp: Seconds since 1970-01-01T00:00:00Z, may be negative.

    Returns:
        Timezone-aware UTC datetime.
    """
    return EPOCH + timedelta(seconds=timestamp)


def timestamp_from_instant(instant: datetime) -> int:
    """Convert an instant back to whole seconds since the epoch.

    Naive datetimes are taken to be UTC, which is how the SQLite store
    persists them. Sub-second parts are truncated toward negative infinity.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return (instant - EPOCH) // timedelta(seconds=1)


def to_storage(instant: datetime) -> datetime:
    """Normalize an instant for storage: naive UTC, seconds precision."""
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc).replace(tzinfo=None)
    return instant.replace(microsecond=0)


def from_storage(value: datetime | None) -> datetime | None:
    """Re-attach UTC to a naive datetime read from storage."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
