"""
Time helpers
All timestamps are handled as timezone-aware UTC
"""

from datetime import datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Union[datetime, str, None]) -> Optional[datetime]:
    """
    Normalize a datetime to aware UTC (naive values are taken as UTC)

    SQLite hands timestamps back as ISO-8601 text, so strings are parsed first.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
