"""
Track storage module.

Usage:
    from app.features.tracks import Track, TrackRepository, GPXImportService
    from app.features.tracks import LocationSample, WaypointSample

Components:
- Track, TrackPoint, Waypoint: SQLAlchemy models
- TrackRepository: CRUD and streaming sources for export
- GPXImportService: Store a GPX file as a track
- LocationSample, WaypointSample: Read-only values produced by the sources
- TrackInfo: Pydantic schema for track metadata
"""

from .models import Track, TrackPoint, Waypoint
from .types import LocationSample, WaypointSample, is_valid_location
from .repository import TrackRepository, TrackReadError
from .importer import GPXImportService
from .schemas import TrackInfo, TrackImportResponse

__all__ = [
    # Models
    "Track",
    "TrackPoint",
    "Waypoint",
    # Types
    "LocationSample",
    "WaypointSample",
    "is_valid_location",
    # Services
    "TrackRepository",
    "TrackReadError",
    "GPXImportService",
    # Schemas
    "TrackInfo",
    "TrackImportResponse",
]
