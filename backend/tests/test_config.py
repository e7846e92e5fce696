"""
Tests for application settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import Settings
from app.shared.constants import TrackFormat


class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.export_root == Path("./exports")
        assert config.default_export_format == TrackFormat.GPX
        assert config.locations_batch_size == 500
        assert config.max_loaded_waypoints == 10000

    def test_postgres_url_rewritten(self):
        config = Settings(_env_file=None, database_url="postgres://user@db/tracks")
        assert config.database_url == "postgresql://user@db/tracks"

    def test_cors_origins_from_string(self):
        config = Settings(_env_file=None, cors_origins="https://a.example, https://b.example")
        assert config.cors_origins == ["https://a.example", "https://b.example"]

    def test_format_from_string(self):
        assert Settings(_env_file=None, default_export_format="kml").default_export_format == TrackFormat.KML

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_export_format="shp")

    @pytest.mark.parametrize("field", ["locations_batch_size", "max_loaded_waypoints"])
    def test_positive_limits(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EXPORT_ROOT", str(tmp_path))
        monkeypatch.setenv("LOCATIONS_BATCH_SIZE", "50")

        config = Settings(_env_file=None)

        assert config.export_root == tmp_path
        assert config.locations_batch_size == 50
