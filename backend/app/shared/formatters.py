"""
Formatting utilities for exported documents.

Used by all format writers and the statistics marker description.
"""

from datetime import datetime, timezone
from typing import Optional


def format_iso_time(value: Optional[datetime]) -> str:
    """
    Format a timestamp as ISO 8601 UTC ('2024-05-01T08:30:00Z').

    Naive datetimes are treated as UTC, which is how the track store
    keeps them.

    Args:
        value: Timestamp or None

    Returns:
        Formatted string, empty for None
    """
    if value is None:
        return ""

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)

    if value.microsecond:
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_coordinate(value: float) -> str:
    """Format a latitude/longitude with 6 decimals (~0.1 m)."""
    return f"{value:.6f}"


def format_altitude(value: Optional[float]) -> str:
    """Format altitude in meters with 1 decimal, empty for None."""
    if value is None:
        return ""
    return f"{value:.1f}"


def format_duration(seconds: Optional[float]) -> str:
    """
    Format a duration as 'H:MM:SS'.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (e.g., '1:05:09'), '—' for None or negative
    """
    if seconds is None or seconds < 0:
        return "—"

    total = int(seconds)
    h = total // 3600
    m = (total % 3600) // 60
    s = total % 60
    return f"{h}:{m:02d}:{s:02d}"


def format_distance_km(km: Optional[float]) -> str:
    """
    Format distance.

    Args:
        km: Distance in kilometers

    Returns:
        Formatted string (e.g., '12.5 km' or '850 m')
    """
    if km is None:
        return "—"
    if km < 1:
        return f"{int(km * 1000)} m"
    return f"{km:.1f} km"
