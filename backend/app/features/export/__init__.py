"""
Track export module.

Usage:
    from app.features.export import TrackExporter, get_writer
    exporter = TrackExporter(track, get_writer("gpx"), source=TrackRepository(db))
    outcome = exporter.export()

Components:
- LocationSegmenter: Location stream -> path segments
- write_waypoints: Waypoint pass (skips the statistics marker)
- TrackExporter: Document lifecycle and outcome
- FileSinkFactory: Output file creation
- ExportJobManager: Background exports
- GpxTrackWriter, KmlTrackWriter, CsvTrackWriter: Format writers
"""

from .types import ExportErrorCode, ExportOutcome, ExportState
from .errors import (
    ExportError,
    StorageUnavailableError,
    DirectoryCreationError,
    OutputOpenError,
)
from .writers import (
    TrackFormatWriter,
    GpxTrackWriter,
    KmlTrackWriter,
    CsvTrackWriter,
    get_writer,
)
from .segmenter import LocationSegmenter, SegmentationStats, write_locations
from .waypoints import write_waypoints
from .storage import FileSinkFactory, OutputSink, build_unique_filename, sanitize_file_base
from .service import TrackExporter
from .background import ExportJob, ExportJobManager
from .schemas import ExportJobInfo

__all__ = [
    # Types
    "ExportErrorCode",
    "ExportOutcome",
    "ExportState",
    # Errors
    "ExportError",
    "StorageUnavailableError",
    "DirectoryCreationError",
    "OutputOpenError",
    # Writers
    "TrackFormatWriter",
    "GpxTrackWriter",
    "KmlTrackWriter",
    "CsvTrackWriter",
    "get_writer",
    # Core
    "LocationSegmenter",
    "SegmentationStats",
    "write_locations",
    "write_waypoints",
    "TrackExporter",
    # Storage
    "FileSinkFactory",
    "OutputSink",
    "build_unique_filename",
    "sanitize_file_base",
    # Background
    "ExportJob",
    "ExportJobManager",
    "ExportJobInfo",
]
