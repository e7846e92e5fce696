"""
Shared API dependencies.
"""

from fastapi import HTTPException, Request

from app.features.export import ExportJobManager, FileSinkFactory


def get_sink_factory() -> FileSinkFactory:
    """Output file factory rooted at settings.export_root."""
    return FileSinkFactory()


def get_export_jobs(request: Request) -> ExportJobManager:
    """Background export manager created at startup."""
    jobs = getattr(request.app.state, "export_jobs", None)
    if jobs is None:
        raise HTTPException(status_code=503, detail="Background exports are not running")
    return jobs
