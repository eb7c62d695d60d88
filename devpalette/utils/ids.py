"""
DevPalette Id Utilities
Clock-derived ids for colors and combination records.
"""
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def generate_clock_id(now: datetime) -> str:
    """
    Generate an id from a clock reading.

    The id is the reading in epoch milliseconds. Two entities created
    within the same millisecond get the same id.

    Args:
        now: Aware clock reading the entity is created at

    Returns:
        Id string
    """
    return str((now - EPOCH) // timedelta(milliseconds=1))


def iso_timestamp(now: datetime) -> str:
    """UTC ISO-8601 text with millisecond precision, e.g. 2026-10-19T12:00:00.000Z."""
    utc = now.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
