"""
Tests for the waypoint pass.
"""

import pytest

from app.features.export.waypoints import write_waypoints
from app.features.tracks.types import WaypointSample


class TestWriteWaypoints:
    """Tests for write_waypoints function."""

    @pytest.mark.parametrize("count,expected", [(0, 0), (1, 0), (2, 1), (5, 4)])
    def test_first_waypoint_is_skipped(self, writer, samples, count, expected):
        """N stored waypoints give max(0, N - 1) writes."""
        waypoints = [samples.statistics_marker()] + [samples.marker(i) for i in range(1, count)]
        waypoints = waypoints[:count]

        written = write_waypoints(iter(waypoints), writer)

        assert written == expected
        assert writer.names.count("waypoint") == expected

    def test_order_is_preserved(self, writer, samples):
        waypoints = [samples.statistics_marker(), samples.marker(1), samples.marker(2), samples.marker(3)]

        write_waypoints(waypoints, writer)

        assert [call[1] for call in writer.calls] == waypoints[1:]

    def test_statistics_marker_is_never_written(self, writer, samples):
        stats = samples.statistics_marker()
        write_waypoints([stats, samples.marker(1)], writer)

        assert stats not in [call[1] for call in writer.calls]

    def test_first_entry_skipped_even_when_not_statistics(self, writer, samples):
        """Only the position counts, not the waypoint type."""
        first = samples.marker(0)
        write_waypoints([first, samples.marker(1)], writer)

        assert [call[1] for call in writer.calls] == [samples.marker(1)]

    def test_no_coordinate_filtering(self, writer, samples):
        """Waypoints are forwarded as stored, even out of range."""
        odd = WaypointSample(latitude=100.0, longitude=0.0, name="odd")
        write_waypoints([samples.statistics_marker(), odd], writer)

        assert writer.calls == [("waypoint", odd)]

    def test_generator_source(self, writer, samples):
        source = (samples.marker(i) for i in range(3))
        assert write_waypoints(source, writer) == 2
