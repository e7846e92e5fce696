"""
KML 2.2 writer.

The track is one Placemark with a MultiGeometry holding one LineString
per segment, framed by start and end Placemarks. Waypoints become
Point Placemarks.
"""

from typing import Optional
from xml.sax.saxutils import escape

from app.features.tracks.types import LocationSample, WaypointSample
from app.shared.formatters import format_iso_time
from .base import TrackFormatWriter

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"


def _coordinates(latitude: float, longitude: float, altitude) -> str:
    """KML order is lon,lat[,alt]."""
    return f"{longitude:.6f},{latitude:.6f},{altitude or 0:.1f}"


class KmlTrackWriter(TrackFormatWriter):
    """Writes tracks as KML 2.2 (Placemark/MultiGeometry/LineString)."""

    extension = "kml"

    def __init__(self, creator: Optional[str] = None):
        super().__init__(creator)
        self._last_point: Optional[LocationSample] = None

    def write_header(self) -> None:
        self._write('<?xml version="1.0" encoding="UTF-8"?>\n')
        self._write(f'<kml xmlns="{KML_NAMESPACE}">\n')
        self._write("<Document>\n")
        self._write(f"<name>{escape(self.track.name or '')}</name>\n")
        self._write(f"<description>{escape(self.creator)}</description>\n")
        self._write(
            '<Style id="track"><LineStyle><color>7f0000ff</color>'
            "<width>4</width></LineStyle></Style>\n"
        )
        self._write('<Style id="start"><IconStyle><scale>1.3</scale></IconStyle></Style>\n')
        self._write('<Style id="end"><IconStyle><scale>1.3</scale></IconStyle></Style>\n')
        self._write('<Style id="waypoint"><IconStyle><scale>1.0</scale></IconStyle></Style>\n')

    def write_footer(self) -> None:
        self._write("</Document>\n")
        self._write("</kml>\n")

    def begin_track(self, anchor: LocationSample) -> None:
        self._write_placemark(
            f"{self.track.name} (Start)", None, "start",
            anchor.latitude, anchor.longitude, anchor.altitude, anchor.time,
        )
        self._write("<Placemark>\n")
        self._write(f"<name>{escape(self.track.name or '')}</name>\n")
        if self.track.description:
            self._write(f"<description>{escape(self.track.description)}</description>\n")
        self._write("<styleUrl>#track</styleUrl>\n")
        self._write("<MultiGeometry>\n")

    def end_track(self, anchor: LocationSample) -> None:
        if not anchor.is_valid and self._last_point is not None:
            # Pause or dropout at the end of the stream
            anchor = self._last_point
        self._write("</MultiGeometry>\n")
        self._write("</Placemark>\n")
        self._write_placemark(
            f"{self.track.name} (End)", None, "end",
            anchor.latitude, anchor.longitude, anchor.altitude, anchor.time,
        )

    def open_segment(self) -> None:
        self._write("<LineString>\n")
        self._write("<tessellate>1</tessellate>\n")
        self._write("<altitudeMode>clampToGround</altitudeMode>\n")
        self._write("<coordinates>\n")

    def close_segment(self) -> None:
        self._write("</coordinates>\n")
        self._write("</LineString>\n")

    def write_point(self, sample: LocationSample) -> None:
        self._last_point = sample
        self._write(_coordinates(sample.latitude, sample.longitude, sample.altitude) + "\n")

    def write_waypoint(self, waypoint: WaypointSample) -> None:
        self._write_placemark(
            waypoint.name or "", waypoint.description, "waypoint",
            waypoint.latitude, waypoint.longitude, waypoint.altitude, waypoint.time,
        )

    def _write_placemark(self, name, description, style, latitude, longitude, altitude, time) -> None:
        self._write("<Placemark>\n")
        self._write(f"<name>{escape(name)}</name>\n")
        if description:
            self._write(f"<description>{escape(description)}</description>\n")
        if time is not None:
            self._write(f"<TimeStamp><when>{format_iso_time(time)}</when></TimeStamp>\n")
        self._write(f"<styleUrl>#{style}</styleUrl>\n")
        self._write("<Point>\n")
        self._write(f"<coordinates>{_coordinates(latitude, longitude, altitude)}</coordinates>\n")
        self._write("</Point>\n")
        self._write("</Placemark>\n")
