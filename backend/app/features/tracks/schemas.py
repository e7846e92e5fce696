"""
Track-related schemas.

Pydantic models for track API responses.
"""

from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class TrackInfo(BaseModel):
    """Stored track metadata."""

    id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None

    # Metrics
    distance_km: float = 0
    elevation_gain_m: float = 0
    elevation_loss_m: float = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    # Coordinates
    start_lat: Optional[float] = None
    start_lon: Optional[float] = None
    end_lat: Optional[float] = None
    end_lon: Optional[float] = None

    # Counts (samples include invalid/pause markers)
    points_count: int = 0
    waypoints_count: int = 0

    created_at: Optional[datetime] = None


class TrackImportResponse(BaseModel):
    """Response for GPX import."""

    success: bool
    track_id: str
    info: TrackInfo
