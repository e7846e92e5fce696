"""
Track Routes

Endpoints for importing, listing and exporting tracks.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from app.api.deps import get_export_jobs, get_sink_factory
from app.config import settings
from app.db.session import get_db
from app.features.export import (
    ExportErrorCode,
    ExportJobInfo,
    ExportJobManager,
    FileSinkFactory,
    TrackExporter,
    get_writer,
)
from app.features.tracks import (
    GPXImportService,
    TrackImportResponse,
    TrackInfo,
    TrackRepository,
)
from app.shared.constants import FORMAT_MEDIA_TYPES, TrackFormat

router = APIRouter()


@router.post("/import", response_model=TrackImportResponse)
def import_gpx(
    file: UploadFile = File(...),
    db: Session = Depends(get_db)
):
    """
    Upload a GPX file and store it as a track.

    Returns the stored track metadata.
    """
    # Validate file
    if not file.filename or not file.filename.lower().endswith('.gpx'):
        raise HTTPException(status_code=400, detail="Only .gpx files are allowed")

    # Read content
    content = file.file.read()

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="File is empty")

    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=400, detail="File too large")

    repo = TrackRepository(db)
    try:
        track = GPXImportService(repo).import_gpx(content, filename=file.filename)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TrackImportResponse(
        success=True,
        track_id=track.id,
        info=repo.to_info(track)
    )


@router.get("", response_model=list[TrackInfo])
def list_tracks(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """List stored tracks, newest first."""
    repo = TrackRepository(db)
    return [repo.to_info(track) for track in repo.list_tracks(limit=limit, offset=offset)]


@router.get("/{track_id}", response_model=TrackInfo)
def get_track(
    track_id: str,
    db: Session = Depends(get_db)
):
    """Get track information by ID."""
    repo = TrackRepository(db)
    track = repo.get_by_id(track_id)

    if not track:
        raise HTTPException(status_code=404, detail="Track not found")

    return repo.to_info(track)


@router.get("/{track_id}/export")
def export_track(
    track_id: str,
    format: Optional[TrackFormat] = Query(None, description="gpx, kml or csv"),
    db: Session = Depends(get_db),
    sink_factory: FileSinkFactory = Depends(get_sink_factory),
):
    """
    Export a track and return the written document.

    Runs the export synchronously on the request worker thread.
    """
    track_format = format or settings.default_export_format
    repo = TrackRepository(db)
    exporter = TrackExporter(
        repo.get_by_id(track_id),
        get_writer(track_format),
        source=repo,
        sink_factory=sink_factory,
    )
    outcome = exporter.export()

    if not outcome.success:
        status = 404 if outcome.error_code == ExportErrorCode.TRACK_NOT_FOUND else 500
        raise HTTPException(
            status_code=status,
            detail={"code": outcome.error_code.value, "message": outcome.message},
        )

    path = exporter.output_path
    return FileResponse(path, media_type=FORMAT_MEDIA_TYPES[track_format], filename=path.name)


@router.post("/{track_id}/exports", response_model=ExportJobInfo, status_code=202)
async def schedule_export(
    track_id: str,
    format: Optional[TrackFormat] = Query(None, description="gpx, kml or csv"),
    jobs: ExportJobManager = Depends(get_export_jobs),
):
    """
    Schedule a background export.

    Poll GET /exports/{job_id} for the result.
    """
    job = jobs.submit(track_id, format or settings.default_export_format)
    return ExportJobInfo.from_job(job)
