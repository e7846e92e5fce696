"""
Export Job Routes
"""

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_export_jobs
from app.features.export import ExportJobInfo, ExportJobManager

router = APIRouter()


@router.get("/{job_id}", response_model=ExportJobInfo)
async def get_export_job(
    job_id: str,
    jobs: ExportJobManager = Depends(get_export_jobs),
):
    """Get background export status."""
    job = jobs.get(job_id)

    if not job:
        raise HTTPException(status_code=404, detail="Export job not found")

    return ExportJobInfo.from_job(job)
