"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database; nothing touches the
configured DATABASE_URL or EXPORT_ROOT.
"""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models.base import Base
import app.features.tracks.models  # noqa: F401 - registers tables
from app.features.export.writers.base import TrackFormatWriter
from app.features.tracks import TrackRepository
from app.features.tracks.types import LocationSample, WaypointSample
from app.shared.constants import PAUSE_LATITUDE, WaypointType


# =============================================================================
# Test Data
# =============================================================================

START_TIME = datetime(2024, 5, 1, 8, 0, 0)

SAMPLE_GPX = b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <metadata>
    <name>Morning Ride</name>
    <desc>Along the river</desc>
  </metadata>
  <wpt lat="43.2400" lon="76.9400">
    <ele>1005</ele>
    <name>Bridge</name>
    <desc>Old stone bridge</desc>
    <type>landmark</type>
  </wpt>
  <wpt lat="43.2450" lon="76.9450">
    <name>Cafe</name>
  </wpt>
  <trk>
    <name>Morning Ride</name>
    <type>cycling</type>
    <trkseg>
      <trkpt lat="43.2300" lon="76.9300"><ele>1000</ele><time>2024-05-01T08:00:00Z</time></trkpt>
      <trkpt lat="43.2310" lon="76.9310"><ele>1010</ele><time>2024-05-01T08:01:00Z</time></trkpt>
      <trkpt lat="43.2320" lon="76.9320"><ele>1020</ele><time>2024-05-01T08:02:00Z</time></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="43.2400" lon="76.9400"><ele>1015</ele><time>2024-05-01T08:10:00Z</time></trkpt>
      <trkpt lat="43.2410" lon="76.9410"><ele>1005</ele><time>2024-05-01T08:11:00Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


def valid(i: int, **kwargs) -> LocationSample:
    """Valid sample number i, a few meters north-east of the previous one."""
    return LocationSample(
        latitude=43.23 + i * 0.001,
        longitude=76.93 + i * 0.001,
        altitude=kwargs.pop("altitude", 1000.0 + i),
        time=kwargs.pop("time", START_TIME + timedelta(seconds=10 * i)),
        **kwargs,
    )


def pause() -> LocationSample:
    """Pause marker between recorded segments."""
    return LocationSample(latitude=PAUSE_LATITUDE, longitude=0.0)


def marker(i: int, **kwargs) -> WaypointSample:
    return WaypointSample(
        latitude=43.3 + i * 0.01,
        longitude=76.9 + i * 0.01,
        name=kwargs.pop("name", f"Marker {i}"),
        **kwargs,
    )


def statistics_marker() -> WaypointSample:
    return WaypointSample(
        latitude=43.23,
        longitude=76.93,
        name="Track statistics",
        waypoint_type=WaypointType.STATISTICS,
    )


# =============================================================================
# Recording Writer
# =============================================================================

class RecordingWriter(TrackFormatWriter):
    """Writer that records protocol calls instead of rendering them."""

    extension = "rec"

    def __init__(self, fail_on: str = None, error=OSError):
        super().__init__(creator="tests")
        self.calls = []
        self.fail_on = fail_on
        self.error = error

    def _record(self, *call):
        if call[0] == self.fail_on:
            raise self.error(f"failure during {call[0]}")
        self.calls.append(call)

    def prepare(self, track, stream):
        super().prepare(track, stream)
        self._record("prepare")

    def write_header(self):
        self._record("header")

    def write_footer(self):
        self._record("footer")

    def begin_track(self, anchor):
        self._record("begin", anchor)

    def end_track(self, anchor):
        self._record("end", anchor)

    def open_segment(self):
        self._record("open")

    def close_segment(self):
        self._record("close_segment")

    def write_point(self, sample):
        self._record("point", sample)

    def write_waypoint(self, waypoint):
        self._record("waypoint", waypoint)

    def close(self):
        self._record("close")
        super().close()

    @property
    def names(self):
        return [call[0] for call in self.calls]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def samples():
    """Builders for location and waypoint samples."""
    return SimpleNamespace(
        valid=valid,
        pause=pause,
        marker=marker,
        statistics_marker=statistics_marker,
    )


@pytest.fixture
def make_writer():
    """Factory for RecordingWriter instances."""
    return RecordingWriter


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def sample_gpx():
    return SAMPLE_GPX


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repo(db):
    """Repository with a tiny batch size so streaming spans several batches."""
    return TrackRepository(db, batch_size=2)


@pytest.fixture
def stored_track(repo):
    """
    Track with two segments split by a pause, a statistics marker and
    two markers.
    """
    track = repo.create(name="Morning Ride", description="Along the river", category="cycling")
    repo.add_points(track.id, [valid(0), valid(1), valid(2), pause(), valid(3), valid(4)])
    repo.add_waypoint(track.id, statistics_marker())
    repo.add_waypoint(track.id, marker(1, description="Old stone bridge"))
    repo.add_waypoint(track.id, marker(2))
    return track
