"""
Track storage models.

Models:
- Track: Recorded track with summary statistics
- TrackPoint: Raw location samples, in recording order
- Waypoint: Annotated points (first one per track holds statistics)
"""

from datetime import datetime
import uuid

from sqlalchemy import Column, String, DateTime, Integer, Float, ForeignKey, Text
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.shared.constants import WaypointType


class Track(Base):
    """
    Recorded GPS track.

    Points and waypoints are stored in separate tables and are
    streamed by id order when the track is exported.
    """

    __tablename__ = "tracks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Display info
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)

    # Summary statistics
    distance_km = Column(Float, nullable=True)
    elevation_gain_m = Column(Float, nullable=True)
    elevation_loss_m = Column(Float, nullable=True)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)

    # Start/end coordinates
    start_lat = Column(Float, nullable=True)
    start_lon = Column(Float, nullable=True)
    end_lat = Column(Float, nullable=True)
    end_lon = Column(Float, nullable=True)

    # Source file, when imported
    source_filename = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    points = relationship(
        "TrackPoint",
        back_populates="track",
        lazy="raise",
        passive_deletes=True,
    )
    waypoints = relationship(
        "Waypoint",
        back_populates="track",
        lazy="raise",
        passive_deletes=True,
    )

    @property
    def duration_s(self) -> float | None:
        """Elapsed time between first and last sample."""
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    def __repr__(self):
        return f"<Track {self.id} ({self.name})>"


class TrackPoint(Base):
    """
    Single raw location sample.

    Invalid samples (dropouts, pause markers) are stored as recorded;
    the exporter decides what is rendered.
    """

    __tablename__ = "track_points"

    id = Column(Integer, primary_key=True, autoincrement=True)
    track_id = Column(
        String(36), ForeignKey("tracks.id", ondelete="CASCADE"), nullable=False, index=True
    )

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    altitude = Column(Float, nullable=True)  # meters
    time = Column(DateTime, nullable=True)  # UTC

    speed = Column(Float, nullable=True)  # meters per second
    bearing = Column(Float, nullable=True)  # degrees
    accuracy = Column(Float, nullable=True)  # meters

    track = relationship("Track", back_populates="points")

    def __repr__(self):
        return f"<TrackPoint {self.id} ({self.latitude}, {self.longitude})>"


class Waypoint(Base):
    """
    Annotated point of a track.

    Statistics markers (waypoint_type = 1) carry segment statistics
    in distance_km / duration_s.
    """

    __tablename__ = "waypoints"

    id = Column(Integer, primary_key=True, autoincrement=True)
    track_id = Column(
        String(36), ForeignKey("tracks.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    waypoint_type = Column(Integer, nullable=False, default=WaypointType.MARKER.value)

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    altitude = Column(Float, nullable=True)
    time = Column(DateTime, nullable=True)

    # Statistics (markers of type STATISTICS only)
    distance_km = Column(Float, nullable=True)
    duration_s = Column(Float, nullable=True)

    track = relationship("Track", back_populates="waypoints")

    def __repr__(self):
        return f"<Waypoint {self.id} {self.name!r}>"
