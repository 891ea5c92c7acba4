"""
Time helpers.

Every timestamp the service stores or compares is an aware UTC datetime.
Some drivers (SQLite) hand back naive values; as_utc() restores the zone.
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to aware UTC; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def floor_to_hour(value: datetime) -> datetime:
    value = as_utc(value)
    return value.replace(minute=0, second=0, microsecond=0)
