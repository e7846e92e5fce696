"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

from app.shared.constants import TrackFormat


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./tracks.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Export ===
    export_root: Path = Field(
        default=Path("./exports"),
        description="Root directory for exported documents"
    )
    default_export_format: TrackFormat = Field(default=TrackFormat.GPX)
    document_creator: str = Field(
        default="GPX Track Export",
        description="Creator string written into exported documents"
    )

    # === Streaming ===
    locations_batch_size: int = Field(
        default=500,
        description="Rows fetched per round-trip while streaming locations"
    )
    max_loaded_waypoints: int = Field(
        default=10000,
        description="Maximum number of waypoints read per export"
    )

    # === Uploads ===
    max_upload_bytes: int = Field(default=20 * 1024 * 1024)

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('locations_batch_size', 'max_loaded_waypoints')
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
