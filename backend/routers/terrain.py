import asyncio
import logging
from typing import List

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from backend.jobs import job_manager
from backend.models import BuildRequest, JobResponse, LandformInfo, TerrainRequest
from geostl.builder import generate, output_filename
from geostl.constants import OUTPUT_FORMATS
from geostl.models import Landform
from geostl.stl import serialize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/terrain", tags=["terrain"])


def _render_stl(params) -> str:
    return serialize(generate(params), params)


@router.get("/landforms", response_model=List[LandformInfo])
async def list_landforms():
    """Return every landform archetype with its display label."""
    return [
        LandformInfo(value=lf.value, label=lf.label, description=lf.description)
        for lf in Landform
    ]


@router.post("/stl")
async def terrain_stl(request: TerrainRequest):
    """Generate a terrain and return it directly as an ASCII STL download.

    Generation runs in a worker thread so large grids don't stall the
    event loop.
    """
    params = request.to_params()
    text = await asyncio.to_thread(_render_stl, params)
    filename = output_filename(params)
    return Response(
        content=text,
        media_type="model/stl",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/build", response_model=JobResponse)
async def build_terrain(request: BuildRequest):
    """Start a background export into the output directory.

    The caller receives a job ID immediately and can poll
    ``/status/{job_id}`` for progress.
    """
    if request.output_format not in OUTPUT_FORMATS:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown output format: {request.output_format}")
    params = request.to_params()

    job = job_manager.create_job()
    asyncio.create_task(job_manager.run_export(
        job, params, output_format=request.output_format))

    return JobResponse(
        job_id=job.id,
        status=job.status.value,
        progress=job.progress,
        message=job.message,
        result=job.result,
    )


@router.get("/status/{job_id}", response_model=JobResponse)
async def get_build_status(job_id: str):
    """Poll the status of a running or completed export job."""
    job = job_manager.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")

    return JobResponse(
        job_id=job.id,
        status=job.status.value,
        progress=job.progress,
        message=job.message,
        result=job.result,
    )
