"""
FastAPI routes for the Product Studio API.
"""

import asyncio
import logging
import uuid
from typing import Any
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from pydantic import BaseModel

from .models import (
    DescriptionRequest,
    DescriptionResponse,
    HealthResponse,
    ImagesRequest,
    ImagesResponse,
    JobResponse,
    LogoRequest,
    LogoResponse,
    PipelineRequest,
    ProductIdeaRequest,
    VideoRequest,
)
from ..agents import (
    analyze_feedback,
    generate_commercial_description,
    generate_product_idea,
    generate_product_images,
    generate_product_video,
    save_artifact,
)
from ..config import settings
from ..graph import run_pipeline
from ..render.gemini_client import get_gemini_client, is_gemini_configured
from ..render.jobs import StudioError
from ..state import FeedbackReport, Product, StudioState
from ..storage.preferences import PreferenceStore
from .. import __version__

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/studio", tags=["Product Studio"])


class JobRecord(BaseModel):
    """In-memory bookkeeping for a background job"""

    job_id: str
    kind: str = "video"
    status: str = "pending"
    progress_message: str | None = None
    error: str | None = None
    video_path: str | None = None
    state: StudioState | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None


# In-memory job storage (single user, lost on restart)
_jobs: dict[str, JobRecord] = {}
_job_tasks: dict[str, asyncio.Task] = {}
_job_providers: dict[str, Any] = {}


def get_provider():
    """Provider dependency (overridden in tests)."""
    try:
        return get_gemini_client()
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))


def get_preferences() -> PreferenceStore:
    return PreferenceStore()


# ============================================================================
# Workflow steps
# ============================================================================


@router.post("/product", response_model=Product)
async def create_product(request: ProductIdeaRequest, provider=Depends(get_provider)):
    """Step 1: turn an idea into a product concept."""
    try:
        return await generate_product_idea(request.idea, provider)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StudioError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/description", response_model=DescriptionResponse)
async def create_description(request: DescriptionRequest, provider=Depends(get_provider)):
    """Step 2: write the commercial description."""
    try:
        description = await generate_commercial_description(request.product, provider)
    except StudioError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return DescriptionResponse(description=description)


@router.post("/images", response_model=ImagesResponse)
async def create_images(request: ImagesRequest, provider=Depends(get_provider)):
    """Step 3: generate ad images."""
    try:
        images = await generate_product_images(request.product, request.description, provider)
    except StudioError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return ImagesResponse(images=images)


@router.post("/video", response_model=JobResponse)
async def create_video(request: VideoRequest, provider=Depends(get_provider)):
    """
    Step 4: start video generation.

    Video generation takes minutes, so it runs in the background; poll
    GET /video/{job_id} or subscribe to the WebSocket for progress.
    """
    job_id = str(uuid.uuid4())
    record = JobRecord(job_id=job_id, kind="video")
    _register_job(record, _execute_video_job(job_id, request, provider), provider)

    return _record_to_response(record)


@router.get("/video/{job_id}", response_model=JobResponse)
async def get_video_job(job_id: str):
    """Get the current status of a video job."""
    return _record_to_response(_get_record(job_id))


@router.get("/video/{job_id}/content")
async def get_video_content(job_id: str):
    """Download the finished video."""
    record = _get_record(job_id)
    if record.status != "completed" or not record.video_path:
        raise HTTPException(status_code=409, detail=f"Job is {record.status}")

    return FileResponse(
        record.video_path,
        media_type=settings.video_mime_type,
        filename=Path(record.video_path).name,
    )


@router.delete("/video/{job_id}")
@router.delete("/pipeline/{job_id}")
async def cancel_video_job(job_id: str):
    """Cancel a running video or pipeline job."""
    record = _get_record(job_id)

    task = _job_tasks.get(job_id)
    if task and not task.done():
        started = record.status != "pending"
        task.cancel()
        record.status = "cancelled"
        record.error = "Job cancelled by user"

        # A task cancelled before its first step never reaches its finally block
        if not started:
            record.completed_at = datetime.utcnow()
            _job_tasks.pop(job_id, None)
            await _close_provider(_job_providers.pop(job_id, None))

    return {"status": record.status, "job_id": job_id}


@router.websocket("/ws/video/{job_id}")
async def video_progress_websocket(websocket: WebSocket, job_id: str):
    """
    WebSocket for real-time job progress updates.

    Sends progress updates every 2 seconds until the job finishes.
    """
    await websocket.accept()

    if job_id not in _jobs:
        await websocket.send_json({"error": "Job not found"})
        await websocket.close()
        return

    try:
        while True:
            response = _record_to_response(_jobs[job_id])
            await websocket.send_json(response.model_dump(mode="json", exclude={"state"}))

            if response.status in ("completed", "failed", "cancelled"):
                break

            await asyncio.sleep(2)

        await websocket.close()
    except WebSocketDisconnect:
        pass


# ============================================================================
# End-to-end pipeline
# ============================================================================


@router.post("/pipeline", response_model=JobResponse)
async def create_pipeline_job(request: PipelineRequest, provider=Depends(get_provider)):
    """Run ideation, copywriting, imagery and video in one background job."""
    job_id = str(uuid.uuid4())
    record = JobRecord(job_id=job_id, kind="pipeline", state=StudioState(idea=request.idea))
    _register_job(record, _execute_pipeline_job(job_id, request.idea, provider), provider)

    return _record_to_response(record)


@router.get("/pipeline/{job_id}", response_model=JobResponse)
async def get_pipeline_job(job_id: str):
    """Get the current status of a pipeline job."""
    return _record_to_response(_get_record(job_id))


# ============================================================================
# Feedback dashboard and settings
# ============================================================================


@router.post("/feedback/analyze", response_model=FeedbackReport)
async def analyze_feedback_route(provider=Depends(get_provider)):
    """Analyze (simulated) customer feedback and generate recommendations."""
    try:
        return await analyze_feedback(provider)
    except StudioError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/settings/logo", response_model=LogoResponse)
async def get_logo(preferences: PreferenceStore = Depends(get_preferences)):
    return LogoResponse(logo=preferences.get_logo())


@router.put("/settings/logo", response_model=LogoResponse)
async def update_logo(
    request: LogoRequest,
    preferences: PreferenceStore = Depends(get_preferences),
):
    """Persist a new application logo."""
    try:
        preferences.set_logo(request.logo)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return LogoResponse(logo=request.logo)


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Check service health and Gemini availability."""
    configured = is_gemini_configured()
    available = False

    if configured:
        client = get_gemini_client()
        available = await client.check_health()
        await client.close()

    return HealthResponse(
        status="healthy" if available else "degraded",
        version=__version__,
        gemini_configured=configured,
        gemini_available=available,
    )


# ============================================================================
# Helper Functions
# ============================================================================


async def _execute_video_job(job_id: str, request: VideoRequest, provider):
    """Run the video orchestrator for a job and store the result on disk."""
    record = _jobs[job_id]
    record.status = "running"
    record.started_at = datetime.utcnow()

    def on_progress(message: str) -> None:
        record.progress_message = message

    logger.info(f"[JOB {job_id}] Starting video generation for {request.product.name}")

    try:
        artifact = await generate_product_video(
            request.product,
            request.description,
            request.reference_image,
            on_progress=on_progress,
            provider=provider,
        )
        path = save_artifact(artifact, job_id)

        record.video_path = str(path)
        record.status = "completed"
        logger.info(f"[JOB {job_id}] Video ready at {path}")

    except asyncio.CancelledError:
        logger.info(f"[JOB {job_id}] Cancelled")
        record.status = "cancelled"
        record.error = "Job cancelled by user"
        raise
    except (StudioError, ValueError) as e:
        logger.error(f"[JOB {job_id}] ERROR: {e}")
        record.status = "failed"
        record.error = f"No se pudo generar el video: {e}"
    except Exception as e:
        logger.exception(f"[JOB {job_id}] Unexpected error")
        record.status = "failed"
        record.error = str(e)
    finally:
        record.completed_at = datetime.utcnow()
        _job_tasks.pop(job_id, None)
        _job_providers.pop(job_id, None)
        await _close_provider(provider)


async def _execute_pipeline_job(job_id: str, idea: str, provider):
    """Execute the LangGraph pipeline for a job."""
    record = _jobs[job_id]
    record.status = "running"
    record.started_at = datetime.utcnow()

    def on_progress(message: str) -> None:
        record.progress_message = message

    logger.info(f"[PIPELINE {job_id}] Starting pipeline execution...")

    try:
        final_state = await run_pipeline(
            idea,
            {"provider": provider, "job_id": job_id, "on_progress": on_progress},
        )
        record.state = final_state
        record.video_path = final_state.video_path

        if final_state.error:
            record.status = "failed"
            record.error = final_state.error
        else:
            record.status = "completed"

        logger.info(f"[PIPELINE {job_id}] Finished with status {record.status}")

    except asyncio.CancelledError:
        logger.info(f"[PIPELINE {job_id}] Cancelled")
        record.status = "cancelled"
        record.error = "Job cancelled by user"
        raise
    except Exception as e:
        logger.exception(f"[PIPELINE {job_id}] Unexpected error")
        record.status = "failed"
        record.error = str(e)
    finally:
        record.completed_at = datetime.utcnow()
        _job_tasks.pop(job_id, None)
        _job_providers.pop(job_id, None)
        await _close_provider(provider)


def _register_job(record: JobRecord, coro, provider) -> None:
    """Track a new background job and start its task."""
    _prune_jobs()
    _jobs[record.job_id] = record
    _job_providers[record.job_id] = provider
    _job_tasks[record.job_id] = asyncio.create_task(coro)


def _prune_jobs() -> None:
    """Forget the oldest finished jobs beyond settings.max_finished_jobs."""
    finished = [
        record for record in _jobs.values()
        if record.status in ("completed", "failed", "cancelled")
    ]
    excess = len(finished) - settings.max_finished_jobs
    if excess <= 0:
        return

    finished.sort(key=lambda record: record.completed_at or datetime.min)
    for record in finished[:excess]:
        del _jobs[record.job_id]


async def _close_provider(provider) -> None:
    close = getattr(provider, "close", None)
    if close is not None:
        await close()


def _get_record(job_id: str) -> JobRecord:
    if job_id not in _jobs:
        raise HTTPException(status_code=404, detail="Job not found")
    return _jobs[job_id]


def _record_to_response(record: JobRecord) -> JobResponse:
    """Convert a job record to API response."""
    video_url = None
    if record.status == "completed" and record.video_path:
        video_url = f"{router.prefix}/video/{record.job_id}/content"

    return JobResponse(
        job_id=record.job_id,
        kind=record.kind,
        status=record.status,
        progress_message=record.progress_message,
        error=record.error,
        video_url=video_url,
        state=record.state,
        started_at=record.started_at,
        completed_at=record.completed_at,
    )
