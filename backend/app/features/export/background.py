"""
Background export runner.

Runs exports as asyncio tasks so API requests return immediately.
Each job opens its own database session; the export itself runs on a
worker thread (TrackExporter.export_async).
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
import logging
from pathlib import Path
from typing import Optional
import uuid

from app.features.tracks.repository import TrackRepository
from app.shared.constants import TrackFormat
from .service import TrackExporter
from .storage import FileSinkFactory
from .types import ExportOutcome, ExportState
from .writers import get_writer

logger = logging.getLogger(__name__)

# Finished jobs kept for status queries; older ones are dropped first
MAX_FINISHED_JOBS = 1000


@dataclass
class ExportJob:
    """State of one scheduled export."""
    track_id: str
    format: TrackFormat
    directory: Optional[Path] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: ExportState = ExportState.IDLE
    outcome: Optional[ExportOutcome] = None
    output_path: Optional[Path] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    finished_at: Optional[datetime] = None

    @property
    def done(self) -> bool:
        return self.state.is_terminal


class ExportJobManager:
    """
    Schedules exports and keeps their status.

    Usage:
        jobs = ExportJobManager(SessionLocal)
        job = jobs.submit(track_id, TrackFormat.GPX)
        ...
        jobs.get(job.id).state
        await jobs.shutdown()

    submit() must be called from a running event loop.
    """

    def __init__(
        self,
        session_factory,
        sink_factory: Optional[FileSinkFactory] = None,
        max_finished_jobs: int = MAX_FINISHED_JOBS,
    ):
        self._session_factory = session_factory
        self._sink_factory = sink_factory
        self.max_finished_jobs = max_finished_jobs
        self._jobs: dict[str, ExportJob] = {}
        # Keep strong references to running tasks to prevent GC
        self._tasks: set[asyncio.Task] = set()

    def submit(
        self,
        track_id: str,
        track_format: TrackFormat | str,
        directory: Optional[Path] = None,
    ) -> ExportJob:
        """Schedule an export and return its job record."""
        job = ExportJob(track_id=track_id, format=TrackFormat(track_format), directory=directory)
        self._evict_finished()
        self._jobs[job.id] = job

        task = asyncio.create_task(self._run_job(job))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info(f"Scheduled export job {job.id} for track {track_id} ({job.format.value})")
        return job

    def get(self, job_id: str) -> Optional[ExportJob]:
        return self._jobs.get(job_id)

    @property
    def running_count(self) -> int:
        return len(self._tasks)

    async def shutdown(self) -> None:
        """Wait for in-flight exports; they are never cancelled."""
        if self._tasks:
            logger.info(f"Waiting for {len(self._tasks)} export jobs")
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run_job(self, job: ExportJob) -> None:
        job.state = ExportState.OPENING
        try:
            with self._session_factory() as db:
                repo = TrackRepository(db)
                track = await asyncio.to_thread(repo.get_by_id, job.track_id)
                exporter = TrackExporter(
                    track,
                    get_writer(job.format),
                    source=repo,
                    sink_factory=self._sink_factory,
                    directory=job.directory,
                    on_completion=lambda outcome: self._complete(job, exporter, outcome),
                )
                await exporter.export_async()
        except Exception as e:
            logger.error(f"Export job {job.id} crashed: {e}")
            job.state = ExportState.FAILED
            job.finished_at = datetime.utcnow()

    def _evict_finished(self) -> None:
        finished = [job_id for job_id, job in self._jobs.items() if job.done]
        excess = len(finished) - self.max_finished_jobs
        for job_id in finished[:max(0, excess)]:
            del self._jobs[job_id]

    @staticmethod
    def _complete(job: ExportJob, exporter: TrackExporter, outcome: ExportOutcome) -> None:
        job.outcome = outcome
        job.state = exporter.state
        job.output_path = exporter.output_path
        job.finished_at = datetime.utcnow()
        logger.info(f"Export job {job.id} finished: {outcome.error_code.value}")
