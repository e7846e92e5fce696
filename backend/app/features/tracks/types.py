"""
Value types read from the track store.

This module contains only dataclasses and helpers with NO database
imports, so writers and the segmenter can use them without SQLAlchemy.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import math

from app.shared.constants import (
    DROPOUT_LATITUDE,
    DROPOUT_LONGITUDE,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    WaypointType,
)


def is_valid_location(latitude: float, longitude: float) -> bool:
    """
    Check whether a coordinate pair can be rendered as a path point.

    Rejects non-finite values, the (0, 0) dropout placeholder and
    anything outside the legal range (pause markers use latitude 100).
    """
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    if latitude == DROPOUT_LATITUDE and longitude == DROPOUT_LONGITUDE:
        return False
    return abs(latitude) <= MAX_LATITUDE and abs(longitude) <= MAX_LONGITUDE


@dataclass(frozen=True)
class LocationSample:
    """
    A single recorded location.

    Attributes:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        altitude: Altitude in meters, None if unknown
        time: UTC timestamp, None if unknown
        speed: Speed in m/s
        bearing: Bearing in degrees
        accuracy: Horizontal accuracy in meters
    """
    latitude: float
    longitude: float
    altitude: Optional[float] = None
    time: Optional[datetime] = None
    speed: Optional[float] = None
    bearing: Optional[float] = None
    accuracy: Optional[float] = None

    @property
    def is_valid(self) -> bool:
        return is_valid_location(self.latitude, self.longitude)


@dataclass(frozen=True)
class WaypointSample:
    """A stored waypoint as seen by the format writers."""
    latitude: float
    longitude: float
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    waypoint_type: WaypointType = WaypointType.MARKER
    altitude: Optional[float] = None
    time: Optional[datetime] = None
    distance_km: Optional[float] = None
    duration_s: Optional[float] = None

    @property
    def is_statistics(self) -> bool:
        return self.waypoint_type == WaypointType.STATISTICS
