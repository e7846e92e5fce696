"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import tracks, exports

api_router = APIRouter()

api_router.include_router(tracks.router, prefix="/tracks", tags=["Tracks"])
api_router.include_router(exports.router, prefix="/exports", tags=["Exports"])
