"""
Unified constants for track storage and export.

This module provides a single source of truth for format names,
waypoint types and the coordinate sentinels used by the track store.
"""

from enum import Enum


class TrackFormat(str, Enum):
    """
    Document formats a track can be exported to.

    Used in:
    - Export requests (API query parameter, CLI option)
    - Writer lookup (app.features.export.writers.get_writer)
    """
    GPX = "gpx"
    KML = "kml"
    CSV = "csv"


class WaypointType(int, Enum):
    """
    Stored waypoint kinds.

    The first waypoint of every track is a STATISTICS marker holding
    the running statistics of the current/last segment.
    """
    MARKER = 0
    STATISTICS = 1


# Latitude stored for pause/resume markers between recorded segments.
# Out of the legal range, so such samples are never rendered.
PAUSE_LATITUDE: float = 100.0

# Placeholder coordinate written by receivers that have no fix yet.
DROPOUT_LATITUDE: float = 0.0
DROPOUT_LONGITUDE: float = 0.0

MAX_LATITUDE: float = 90.0
MAX_LONGITUDE: float = 180.0

# MIME types served for exported documents
FORMAT_MEDIA_TYPES: dict[TrackFormat, str] = {
    TrackFormat.GPX: "application/gpx+xml",
    TrackFormat.KML: "application/vnd.google-earth.kml+xml",
    TrackFormat.CSV: "text/csv",
}
