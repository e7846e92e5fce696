"""
Track Repository

Data access layer for tracks, their location samples and waypoints.

Export reads through iter_locations() / iter_waypoints(): both are
context managers over a server-side result fetched in batches, so a
track is never loaded into memory as a whole and the result is
released on every exit path.
"""

from contextlib import closing, contextmanager
import logging
from typing import Iterable, Iterator, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.shared.constants import WaypointType
from .models import Track, TrackPoint, Waypoint
from .schemas import TrackInfo
from .types import LocationSample, WaypointSample

logger = logging.getLogger(__name__)


class TrackReadError(RuntimeError):
    """Raised when the track store fails while a track is being streamed."""


class TrackRepository:
    """Repository for track operations."""

    def __init__(
        self,
        db: Session,
        batch_size: Optional[int] = None,
        max_waypoints: Optional[int] = None,
    ):
        self.db = db
        self.batch_size = batch_size or settings.locations_batch_size
        self.max_waypoints = max_waypoints or settings.max_loaded_waypoints

    # =========================================================================
    # CRUD
    # =========================================================================

    def create(self, name: str, commit: bool = True, **fields) -> Track:
        """
        Create a new track record.

        Args:
            name: Display name
            commit: Commit immediately (False to batch with points)
            **fields: Other Track columns

        Returns:
            Created Track model
        """
        track = Track(name=name, **fields)
        self.db.add(track)
        if commit:
            self.db.commit()
            self.db.refresh(track)
        else:
            self.db.flush()
        return track

    def get_by_id(self, track_id: str) -> Optional[Track]:
        """
        Get track by ID.

        Args:
            track_id: UUID of the track

        Returns:
            Track if found, None otherwise
        """
        return self.db.get(Track, track_id)

    def list_tracks(self, limit: int = 100, offset: int = 0) -> list[Track]:
        """List tracks, newest first."""
        result = self.db.scalars(
            select(Track)
            .order_by(Track.created_at.desc(), Track.id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.all())

    def delete(self, track: Track) -> None:
        """Delete a track with its points and waypoints."""
        self.db.execute(TrackPoint.__table__.delete().where(TrackPoint.track_id == track.id))
        self.db.execute(Waypoint.__table__.delete().where(Waypoint.track_id == track.id))
        self.db.delete(track)
        self.db.commit()

    def add_points(
        self,
        track_id: str,
        samples: Iterable[LocationSample],
        commit: bool = True,
    ) -> int:
        """
        Append location samples to a track, in order.

        Returns:
            Number of samples stored
        """
        rows = [
            {
                "track_id": track_id,
                "latitude": s.latitude,
                "longitude": s.longitude,
                "altitude": s.altitude,
                "time": s.time,
                "speed": s.speed,
                "bearing": s.bearing,
                "accuracy": s.accuracy,
            }
            for s in samples
        ]
        if rows:
            self.db.execute(TrackPoint.__table__.insert(), rows)
        if commit:
            self.db.commit()
        return len(rows)

    def add_waypoint(
        self,
        track_id: str,
        sample: WaypointSample,
        commit: bool = True,
    ) -> Waypoint:
        """Append a waypoint to a track."""
        waypoint = Waypoint(
            track_id=track_id,
            name=sample.name,
            description=sample.description,
            category=sample.category,
            waypoint_type=WaypointType(sample.waypoint_type).value,
            latitude=sample.latitude,
            longitude=sample.longitude,
            altitude=sample.altitude,
            time=sample.time,
            distance_km=sample.distance_km,
            duration_s=sample.duration_s,
        )
        self.db.add(waypoint)
        if commit:
            self.db.commit()
            self.db.refresh(waypoint)
        else:
            self.db.flush()
        return waypoint

    def count_points(self, track_id: str) -> int:
        return self.db.scalar(
            select(func.count()).select_from(TrackPoint).where(TrackPoint.track_id == track_id)
        ) or 0

    def count_waypoints(self, track_id: str) -> int:
        return self.db.scalar(
            select(func.count()).select_from(Waypoint).where(Waypoint.track_id == track_id)
        ) or 0

    def to_info(self, track: Track) -> TrackInfo:
        """
        Convert Track model to TrackInfo schema.

        Args:
            track: Track model

        Returns:
            TrackInfo schema
        """
        return TrackInfo(
            id=track.id,
            name=track.name,
            description=track.description,
            category=track.category,
            distance_km=track.distance_km or 0,
            elevation_gain_m=track.elevation_gain_m or 0,
            elevation_loss_m=track.elevation_loss_m or 0,
            start_time=track.start_time,
            end_time=track.end_time,
            start_lat=track.start_lat,
            start_lon=track.start_lon,
            end_lat=track.end_lat,
            end_lon=track.end_lon,
            points_count=self.count_points(track.id),
            waypoints_count=self.count_waypoints(track.id),
            created_at=track.created_at,
        )

    # =========================================================================
    # Streaming sources (used by the exporter)
    # =========================================================================

    @contextmanager
    def iter_locations(self, track_id: str) -> Iterator[Iterator[LocationSample]]:
        """
        Stream the location samples of a track in recording order.

        Usage:
            with repo.iter_locations(track_id) as samples:
                for sample in samples:
                    ...

        Yields:
            Lazy, forward-only iterator of LocationSample
        """
        stmt = (
            select(
                TrackPoint.latitude,
                TrackPoint.longitude,
                TrackPoint.altitude,
                TrackPoint.time,
                TrackPoint.speed,
                TrackPoint.bearing,
                TrackPoint.accuracy,
            )
            .where(TrackPoint.track_id == track_id)
            .order_by(TrackPoint.id)
            .execution_options(yield_per=self.batch_size)
        )
        result = self._execute(stmt)
        with closing(result):
            yield self._stream(result, lambda row: LocationSample(**row._mapping))

    @contextmanager
    def iter_waypoints(self, track_id: str) -> Iterator[Iterator[WaypointSample]]:
        """
        Stream the waypoints of a track ordered by creation.

        The first entry is the statistics marker; callers decide whether
        to skip it.

        Yields:
            Lazy, forward-only iterator of WaypointSample
        """
        stmt = (
            select(
                Waypoint.id,
                Waypoint.name,
                Waypoint.description,
                Waypoint.category,
                Waypoint.waypoint_type,
                Waypoint.latitude,
                Waypoint.longitude,
                Waypoint.altitude,
                Waypoint.time,
                Waypoint.distance_km,
                Waypoint.duration_s,
            )
            .where(Waypoint.track_id == track_id)
            .order_by(Waypoint.id)
            .limit(self.max_waypoints)
            .execution_options(yield_per=self.batch_size)
        )
        result = self._execute(stmt)
        with closing(result):
            yield self._stream(result, self._waypoint_from_row)

    def _execute(self, stmt):
        try:
            return self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise TrackReadError(f"Failed to query track data: {e}") from e

    @staticmethod
    def _stream(result, convert):
        try:
            for row in result:
                yield convert(row)
        except SQLAlchemyError as e:
            raise TrackReadError(f"Failed to read track data: {e}") from e

    @staticmethod
    def _waypoint_from_row(row) -> WaypointSample:
        values = dict(row._mapping)
        values["waypoint_type"] = WaypointType(values["waypoint_type"])
        return WaypointSample(**values)
