"""
Export-related schemas.

Pydantic models for export API responses.
"""

from datetime import datetime
from pydantic import BaseModel
from typing import Optional

from .background import ExportJob


class ExportJobInfo(BaseModel):
    """Status of a background export."""

    job_id: str
    track_id: str
    format: str
    state: str
    done: bool
    success: Optional[bool] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
    output_path: Optional[str] = None
    created_at: datetime
    finished_at: Optional[datetime] = None

    @classmethod
    def from_job(cls, job: ExportJob) -> "ExportJobInfo":
        return cls(
            job_id=job.id,
            track_id=job.track_id,
            format=job.format.value,
            state=job.state.value,
            done=job.done,
            success=job.outcome.success if job.outcome else None,
            error_code=job.outcome.error_code.value if job.outcome else None,
            message=job.outcome.message if job.outcome else None,
            output_path=str(job.output_path) if job.output_path else None,
            created_at=job.created_at,
            finished_at=job.finished_at,
        )
