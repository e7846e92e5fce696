"""
Track format writers.

Usage:
    from app.features.export.writers import get_writer
    writer = get_writer("gpx")

Available formats:
- GPX 1.1 (GpxTrackWriter)
- KML 2.2 (KmlTrackWriter)
- CSV (CsvTrackWriter)
"""

from typing import Optional, Type

from app.shared.constants import TrackFormat
from .base import TrackFormatWriter
from .gpx import GpxTrackWriter
from .kml import KmlTrackWriter
from .csv import CsvTrackWriter

WRITERS: dict[TrackFormat, Type[TrackFormatWriter]] = {
    TrackFormat.GPX: GpxTrackWriter,
    TrackFormat.KML: KmlTrackWriter,
    TrackFormat.CSV: CsvTrackWriter,
}


def get_writer(track_format: TrackFormat | str, creator: Optional[str] = None) -> TrackFormatWriter:
    """
    Create a fresh writer for a format.

    Raises:
        ValueError: If the format is unknown
    """
    try:
        writer_cls = WRITERS[TrackFormat(track_format)]
    except ValueError:
        raise ValueError(f"Unknown export format: {track_format}")
    return writer_cls(creator=creator)


__all__ = [
    "TrackFormatWriter",
    "GpxTrackWriter",
    "KmlTrackWriter",
    "CsvTrackWriter",
    "WRITERS",
    "get_writer",
]
