"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy.

Note: Feature models are imported lazily to avoid circular imports.
Use direct imports from features/ modules when possible.
"""

from app.models.base import Base


# Lazy import functions to avoid circular imports
def _get_track_models():
    """Lazy import of track models."""
    from app.features.tracks.models import Track, TrackPoint, Waypoint
    return Track, TrackPoint, Waypoint


# Expose as module-level attributes
def __getattr__(name):
    if name in ("Track", "TrackPoint", "Waypoint"):
        models = _get_track_models()
        model_map = {
            "Track": models[0],
            "TrackPoint": models[1],
            "Waypoint": models[2],
        }
        return model_map[name]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    "Track",
    "TrackPoint",
    "Waypoint",
]
