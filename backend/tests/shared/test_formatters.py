"""
Tests for document formatting helpers and elevation totals.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.shared.elevation import calculate_elevation_changes
from app.shared.formatters import (
    format_altitude,
    format_coordinate,
    format_distance_km,
    format_duration,
    format_iso_time,
)


# =============================================================================
# Test Time Formatting
# =============================================================================

class TestFormatIsoTime:
    """Tests for format_iso_time function."""

    def test_naive_is_utc(self):
        assert format_iso_time(datetime(2024, 5, 1, 8, 30)) == "2024-05-01T08:30:00Z"

    def test_aware_converted_to_utc(self):
        almaty = timezone(timedelta(hours=5))
        assert format_iso_time(datetime(2024, 5, 1, 13, 30, tzinfo=almaty)) == "2024-05-01T08:30:00Z"

    def test_milliseconds(self):
        value = datetime(2024, 5, 1, 8, 30, 0, 250000)
        assert format_iso_time(value) == "2024-05-01T08:30:00.250Z"

    def test_none(self):
        assert format_iso_time(None) == ""


# =============================================================================
# Test Number Formatting
# =============================================================================

class TestFormatNumbers:
    """Tests for coordinate/altitude/duration/distance formatting."""

    def test_coordinate(self):
        assert format_coordinate(43.2389491234) == "43.238949"
        assert format_coordinate(-0.5) == "-0.500000"

    def test_altitude(self):
        assert format_altitude(1234.56) == "1234.6"
        assert format_altitude(None) == ""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0:00:00"),
        (59.9, "0:00:59"),
        (3909, "1:05:09"),
        (90000, "25:00:00"),
        (None, "—"),
        (-1, "—"),
    ])
    def test_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize("km,expected", [
        (0.5, "500 m"),
        (12.46, "12.5 km"),
        (1.0, "1.0 km"),
        (None, "—"),
    ])
    def test_distance(self, km, expected):
        assert format_distance_km(km) == expected


# =============================================================================
# Test Elevation Changes
# =============================================================================

class TestElevationChanges:
    """Tests for calculate_elevation_changes function."""

    def test_gain_and_loss(self):
        assert calculate_elevation_changes([1000, 1010, 1005, 1020]) == (25.0, 5.0)

    def test_missing_values_skipped(self):
        assert calculate_elevation_changes([1000, None, 1010, None, 990]) == (10.0, 20.0)

    def test_empty(self):
        assert calculate_elevation_changes([]) == (0.0, 0.0)
        assert calculate_elevation_changes([None, None]) == (0.0, 0.0)
