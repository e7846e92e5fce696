"""
Shared utilities (NOT business logic).

Usage:
    from app.shared import haversine, format_iso_time
    from app.shared.constants import TrackFormat
"""
from .geo import (
    haversine,
    calculate_total_distance,
    EARTH_RADIUS_KM,
)
from .elevation import calculate_elevation_changes
from .formatters import (
    format_iso_time,
    format_coordinate,
    format_altitude,
    format_duration,
    format_distance_km,
)
from .constants import (
    TrackFormat,
    WaypointType,
    PAUSE_LATITUDE,
    FORMAT_MEDIA_TYPES,
)

__all__ = [
    # geo
    "haversine",
    "calculate_total_distance",
    "EARTH_RADIUS_KM",
    # elevation
    "calculate_elevation_changes",
    # formatters
    "format_iso_time",
    "format_coordinate",
    "format_altitude",
    "format_duration",
    "format_distance_km",
    # constants
    "TrackFormat",
    "WaypointType",
    "PAUSE_LATITUDE",
    "FORMAT_MEDIA_TYPES",
]
