"""
CSV writer.

One row per rendered point, numbered by segment and by point within
the segment; waypoints follow as rows of type 'waypoint'.
"""

import csv
from typing import TextIO

from app.features.tracks.models import Track
from app.features.tracks.types import LocationSample, WaypointSample
from app.shared.formatters import format_altitude, format_coordinate, format_iso_time
from .base import TrackFormatWriter

CSV_COLUMNS = [
    "Type",
    "Segment",
    "Point",
    "Latitude (deg)",
    "Longitude (deg)",
    "Altitude (m)",
    "Bearing (deg)",
    "Accuracy (m)",
    "Speed (m/s)",
    "Time",
    "Name",
    "Description",
]


def _number(value) -> str:
    return "" if value is None else f"{value:g}"


class CsvTrackWriter(TrackFormatWriter):
    """Writes tracks as a flat CSV table."""

    extension = "csv"

    def prepare(self, track: Track, stream: TextIO) -> None:
        super().prepare(track, stream)
        self._csv = csv.writer(stream)
        self._segment = 0
        self._point = 0

    def write_header(self) -> None:
        self._csv.writerow(CSV_COLUMNS)

    def write_footer(self) -> None:
        pass

    def begin_track(self, anchor: LocationSample) -> None:
        pass

    def end_track(self, anchor: LocationSample) -> None:
        pass

    def open_segment(self) -> None:
        self._segment += 1
        self._point = 0

    def close_segment(self) -> None:
        pass

    def write_point(self, sample: LocationSample) -> None:
        self._point += 1
        self._csv.writerow([
            "trackpoint",
            self._segment,
            self._point,
            format_coordinate(sample.latitude),
            format_coordinate(sample.longitude),
            format_altitude(sample.altitude),
            _number(sample.bearing),
            _number(sample.accuracy),
            _number(sample.speed),
            format_iso_time(sample.time),
            "",
            "",
        ])

    def write_waypoint(self, waypoint: WaypointSample) -> None:
        self._csv.writerow([
            "waypoint",
            "",
            "",
            format_coordinate(waypoint.latitude),
            format_coordinate(waypoint.longitude),
            format_altitude(waypoint.altitude),
            "",
            "",
            "",
            format_iso_time(waypoint.time),
            waypoint.name or "",
            waypoint.description or "",
        ])
