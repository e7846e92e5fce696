"""
GPX 1.1 writer.

Streams the document element by element; nothing is buffered beyond
the current line.
"""

from xml.sax.saxutils import escape, quoteattr

from app.features.tracks.types import LocationSample, WaypointSample
from app.shared.formatters import format_altitude, format_coordinate, format_iso_time
from .base import TrackFormatWriter

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
GPX_SCHEMA_LOCATION = "http://www.topografix.com/GPX/1/1 http://www.topografix.com/GPX/1/1/gpx.xsd"


def _element(tag: str, value, indent: str) -> str:
    """Single text element, empty string when there is no value."""
    if value is None or value == "":
        return ""
    return f"{indent}<{tag}>{escape(str(value))}</{tag}>\n"


class GpxTrackWriter(TrackFormatWriter):
    """Writes tracks as GPX 1.1 (trk/trkseg/trkpt, wpt)."""

    extension = "gpx"

    def write_header(self) -> None:
        self._write('<?xml version="1.0" encoding="UTF-8"?>\n')
        self._write(
            f'<gpx version="1.1" creator={quoteattr(self.creator)}\n'
            f'  xmlns="{GPX_NAMESPACE}"\n'
            f'  xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"\n'
            f'  xsi:schemaLocation="{GPX_SCHEMA_LOCATION}">\n'
        )
        self._write("<metadata>\n")
        self._write(_element("name", self.track.name, "  "))
        self._write(_element("desc", self.track.description, "  "))
        self._write("</metadata>\n")

    def write_footer(self) -> None:
        self._write("</gpx>\n")

    def begin_track(self, anchor: LocationSample) -> None:
        self._write("<trk>\n")
        self._write(_element("name", self.track.name, "  "))
        self._write(_element("desc", self.track.description, "  "))
        self._write(_element("type", self.track.category, "  "))

    def end_track(self, anchor: LocationSample) -> None:
        self._write("</trk>\n")

    def open_segment(self) -> None:
        self._write("  <trkseg>\n")

    def close_segment(self) -> None:
        self._write("  </trkseg>\n")

    def write_point(self, sample: LocationSample) -> None:
        self._write(
            f'    <trkpt lat="{format_coordinate(sample.latitude)}" '
            f'lon="{format_coordinate(sample.longitude)}">\n'
        )
        self._write(_element("ele", format_altitude(sample.altitude), "      "))
        self._write(_element("time", format_iso_time(sample.time), "      "))
        self._write("    </trkpt>\n")

    def write_waypoint(self, waypoint: WaypointSample) -> None:
        # Follows </trk>; the GPX 1.1 schema orders wpt first, common readers accept both
        self._write(
            f'<wpt lat="{format_coordinate(waypoint.latitude)}" '
            f'lon="{format_coordinate(waypoint.longitude)}">\n'
        )
        self._write(_element("ele", format_altitude(waypoint.altitude), "  "))
        self._write(_element("time", format_iso_time(waypoint.time), "  "))
        self._write(_element("name", waypoint.name, "  "))
        self._write(_element("desc", waypoint.description, "  "))
        self._write(_element("type", waypoint.category, "  "))
        self._write("</wpt>\n")
