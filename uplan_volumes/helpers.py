"""Helper functions for time handling.

Functions Overview:
-------------------

format_iso_timestamp(value)
    Format a POSIX timestamp or datetime as ``YYYY-MM-DDTHH:MM:SS`` in UTC,
    without fractional seconds or a ``Z`` suffix (the format the
    authorization service expects).

    Example:
        >>> format_iso_timestamp(1704067195)
        '2023-12-31T23:59:55'

parse_iso_timestamp(timestamp_str)
    Parse ISO 8601 strings back into datetime objects.

is_absolute_time(seconds)
    Whether a waypoint time is a POSIX timestamp rather than an offset.

format_flight_time(total_seconds)
    Human readable duration (e.g., "2h 30m", "45s").
"""

import math
from datetime import datetime, timezone
from typing import Optional, Union

from .constants import ABSOLUTE_TIME_THRESHOLD_S, ISO_TIMESTAMP_FORMAT, SECONDS_PER_HOUR

__all__ = [
    'format_iso_timestamp',
    'parse_iso_timestamp',
    'is_absolute_time',
    'format_flight_time',
]


def format_iso_timestamp(value: Union[int, float, datetime]) -> str:
    """
    Format a POSIX timestamp or datetime as an ISO 8601 string.

    Fractional seconds are truncated (floored), never rounded up.
    Naive datetimes are taken to be UTC.

    Args:
        value: POSIX seconds or datetime

    Returns:
        String like "2024-01-01T00:00:00"
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            dt = value.replace(tzinfo=timezone.utc)
        else:
            dt = value.astimezone(timezone.utc)
        return dt.replace(microsecond=0).strftime(ISO_TIMESTAMP_FORMAT)

    dt = datetime.fromtimestamp(math.floor(value), tz=timezone.utc)
    return dt.strftime(ISO_TIMESTAMP_FORMAT)


def parse_iso_timestamp(timestamp_str: str) -> Optional[datetime]:
    """
    Parse ISO format timestamp string to datetime object.

    Args:
        timestamp_str: Timestamp string (e.g., "2025-03-03T08:58:01" or with "Z")

    Returns:
        datetime object or None if parsing fails
    """
    if not timestamp_str or 'T' not in timestamp_str:
        return None

    try:
        return datetime.fromisoformat(timestamp_str.replace('Z', '+00:00'))
    except (ValueError, TypeError):
        return None


def is_absolute_time(seconds: float) -> bool:
    """
    Whether a waypoint time is an absolute POSIX timestamp.

    Times below ``ABSOLUTE_TIME_THRESHOLD_S`` (about 11.5 days) are offsets
    from the scheduled start.
    """
    return seconds >= ABSOLUTE_TIME_THRESHOLD_S


def format_flight_time(seconds: float) -> str:
    """
    Format flight time in seconds to human-readable string.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted string like "2h 15m", "12m" or "45s"
    """
    if seconds <= 0:
        return "---"

    hours = int(seconds // SECONDS_PER_HOUR)
    minutes = int((seconds % SECONDS_PER_HOUR) // 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m"
    return f"{int(seconds)}s"
