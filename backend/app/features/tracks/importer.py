"""
GPX Import Service

Parses GPX files and stores them as tracks.

Segment boundaries are kept by storing a pause marker between
consecutive GPX segments, so an export of the stored track renders
the same segments again.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import gpxpy
import gpxpy.gpx

from app.shared.constants import PAUSE_LATITUDE, WaypointType
from app.shared.elevation import calculate_elevation_changes
from app.shared.formatters import format_distance_km, format_duration
from app.shared.geo import calculate_total_distance
from .models import Track
from .repository import TrackRepository
from .types import LocationSample, WaypointSample

logger = logging.getLogger(__name__)

STATISTICS_MARKER_NAME = "Track statistics"


def _to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware timestamp to naive UTC (storage convention)."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _sample_from_point(point) -> LocationSample:
    return LocationSample(
        latitude=point.latitude,
        longitude=point.longitude,
        altitude=point.elevation,
        time=_to_utc(point.time),
        speed=getattr(point, "speed", None),
    )


class GPXImportService:
    """
    Service for importing GPX files into the track store.

    Usage:
        service = GPXImportService(TrackRepository(db))
        track = service.import_gpx(content, "morning_run.gpx")
    """

    def __init__(self, repository: TrackRepository):
        self.repository = repository

    @staticmethod
    def parse(content: bytes) -> gpxpy.gpx.GPX:
        """
        Parse GPX content.

        Raises:
            ValueError: If GPX is invalid
        """
        try:
            return gpxpy.parse(content.decode('utf-8'))
        except Exception as e:
            logger.error(f"Failed to parse GPX: {e}")
            raise ValueError(f"Invalid GPX file: {e}")

    @staticmethod
    def extract_segments(gpx: gpxpy.gpx.GPX) -> List[List[LocationSample]]:
        """
        Extract point segments from a parsed GPX document.

        Track segments come first; routes are used only when the file
        has no track points. Empty segments are dropped.
        """
        segments: List[List[LocationSample]] = []

        for track in gpx.tracks:
            for segment in track.segments:
                samples = [_sample_from_point(p) for p in segment.points]
                if samples:
                    segments.append(samples)

        if not segments:
            for route in gpx.routes:
                samples = [_sample_from_point(p) for p in route.points]
                if samples:
                    segments.append(samples)

        return segments

    def import_gpx(self, content: bytes, filename: str = "uploaded.gpx") -> Track:
        """
        Parse GPX content and store it as a new track.

        Args:
            content: GPX file content as bytes
            filename: Original filename (used as fallback name)

        Returns:
            Created Track model

        Raises:
            ValueError: If GPX is invalid or holds no points and no waypoints
        """
        gpx = self.parse(content)
        segments = self.extract_segments(gpx)

        if not segments and not gpx.waypoints:
            raise ValueError("GPX file contains no track points or waypoints")

        name = gpx.name or (gpx.tracks[0].name if gpx.tracks else None) or Path(filename).stem
        description = gpx.description or (gpx.tracks[0].description if gpx.tracks else None)
        category = gpx.tracks[0].type if gpx.tracks else None

        stats = self._calculate_statistics(segments)
        db = self.repository.db

        try:
            track = self.repository.create(
                name=name,
                description=description,
                category=category,
                source_filename=filename,
                commit=False,
                **stats,
            )

            self.repository.add_waypoint(
                track.id, self._statistics_marker(gpx, segments, stats), commit=False
            )

            for i, samples in enumerate(segments):
                if i > 0:
                    pause = LocationSample(latitude=PAUSE_LATITUDE, longitude=0.0)
                    self.repository.add_points(track.id, [pause], commit=False)
                self.repository.add_points(track.id, samples, commit=False)

            for wpt in gpx.waypoints:
                self.repository.add_waypoint(
                    track.id,
                    WaypointSample(
                        latitude=wpt.latitude,
                        longitude=wpt.longitude,
                        name=wpt.name,
                        description=wpt.description or wpt.comment,
                        category=wpt.type or wpt.symbol,
                        altitude=wpt.elevation,
                        time=_to_utc(wpt.time),
                    ),
                    commit=False,
                )

            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(track)
        logger.info(
            f"Imported track {track.id} from {filename}: "
            f"{sum(len(s) for s in segments)} points in {len(segments)} segments, "
            f"{len(gpx.waypoints)} waypoints"
        )
        return track

    @staticmethod
    def _calculate_statistics(segments: List[List[LocationSample]]) -> dict:
        """Summary statistics; distance is never bridged across segments."""
        if not segments:
            return {}

        distance_km = 0.0
        gain = 0.0
        loss = 0.0
        for samples in segments:
            distance_km += calculate_total_distance([(s.latitude, s.longitude) for s in samples])
            seg_gain, seg_loss = calculate_elevation_changes([s.altitude for s in samples])
            gain += seg_gain
            loss += seg_loss

        all_samples = [s for samples in segments for s in samples]
        times = [s.time for s in all_samples if s.time is not None]

        return {
            "distance_km": round(distance_km, 3),
            "elevation_gain_m": round(gain, 0),
            "elevation_loss_m": round(loss, 0),
            "start_time": times[0] if times else None,
            "end_time": times[-1] if times else None,
            "start_lat": all_samples[0].latitude,
            "start_lon": all_samples[0].longitude,
            "end_lat": all_samples[-1].latitude,
            "end_lon": all_samples[-1].longitude,
        }

    @staticmethod
    def _statistics_marker(
        gpx: gpxpy.gpx.GPX,
        segments: List[List[LocationSample]],
        stats: dict,
    ) -> WaypointSample:
        """Statistics marker stored as the first waypoint of the track."""
        if segments:
            anchor = segments[0][0]
            latitude, longitude, altitude = anchor.latitude, anchor.longitude, anchor.altitude
        else:
            first = gpx.waypoints[0]
            latitude, longitude, altitude = first.latitude, first.longitude, first.elevation

        duration_s = None
        if stats.get("start_time") and stats.get("end_time"):
            duration_s = (stats["end_time"] - stats["start_time"]).total_seconds()

        distance_km = stats.get("distance_km")
        return WaypointSample(
            latitude=latitude,
            longitude=longitude,
            altitude=altitude,
            name=STATISTICS_MARKER_NAME,
            description=(
                f"Distance: {format_distance_km(distance_km)}, "
                f"Duration: {format_duration(duration_s)}"
            ),
            waypoint_type=WaypointType.STATISTICS,
            time=stats.get("start_time"),
            distance_km=distance_km,
            duration_s=duration_s,
        )
