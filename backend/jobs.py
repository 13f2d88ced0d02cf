import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from backend import config
from geostl.builder import export_terrain, output_filename
from geostl.models import TerrainParams

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    queued = "queued"
    running = "running"
    completed = "completed"
    failed = "failed"


@dataclass
class Job:
    id: str
    status: JobStatus = JobStatus.queued
    progress: float = 0.0
    message: str = "Queued"
    result: Optional[dict] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _sync_export(params: TerrainParams, output_format: str = "stl",
                 progress_callback=None) -> dict:
    """Run the export pipeline in a worker thread."""
    filename = output_filename(params, output_format)
    result = export_terrain(params, config.OUTPUT_DIR / filename,
                            file_format=output_format,
                            progress_callback=progress_callback)
    result["model_url"] = f"/output/{filename}"
    return result


class JobManager:
    def __init__(self) -> None:
        self.jobs: dict[str, Job] = {}

    def create_job(self) -> Job:
        job = Job(id=str(uuid.uuid4()))
        self.jobs[job.id] = job
        return job

    def get_job(self, job_id: str) -> Optional[Job]:
        return self.jobs.get(job_id)

    async def run_export(self, job: Job, params: TerrainParams,
                         output_format: str = "stl") -> None:
        """Execute the export, updating *job* with progress."""
        try:
            job.status = JobStatus.running
            job.progress = 5.0
            job.message = "Preparing..."

            def _update_progress(pct: float, msg: str) -> None:
                job.progress = pct
                job.message = msg

            result = await asyncio.to_thread(
                _sync_export,
                params,
                output_format=output_format,
                progress_callback=_update_progress,
            )

            job.progress = 100.0
            job.message = "Export complete"
            job.status = JobStatus.completed
            job.result = result

        except Exception as exc:
            logger.exception("Export failed for job %s", job.id)
            job.status = JobStatus.failed
            job.progress = 0.0
            job.message = f"Export failed: {exc}"


# Singleton instance used across the application
job_manager = JobManager()
