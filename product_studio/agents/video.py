"""
Video Agent - Produces the ad video through the job orchestrator.

Step 4 of the studio workflow. The first generated image is used as the
visual reference for the product.
"""

import logging
from pathlib import Path

from ..config import settings
from ..render.gemini_client import get_gemini_client
from ..render.jobs import Artifact, GenerationRequest
from ..render.orchestrator import JobOrchestrator, ProgressCallback
from ..state import Product
from .prompts import product_video_prompt
from .utils import decode_image

logger = logging.getLogger(__name__)


def build_video_request(
    product: Product,
    description: str,
    reference_image_b64: str,
) -> GenerationRequest:
    return GenerationRequest(
        prompt=product_video_prompt(product, description),
        model=settings.video_model,
        reference_image=decode_image(reference_image_b64),
        reference_mime_type=settings.image_mime_type,
        number_of_outputs=settings.video_count,
        output_mime_type=settings.video_mime_type,
    )


async def generate_product_video(
    product: Product,
    description: str,
    reference_image_b64: str,
    on_progress: ProgressCallback | None = None,
    provider=None,
    orchestrator: JobOrchestrator | None = None,
) -> Artifact:
    """
    Generate a 15 second ad video for the product.

    Errors from the orchestrator (SubmissionError, PollError, ProviderError,
    DownloadError) propagate unchanged.
    """
    request = build_video_request(product, description, reference_image_b64)

    own_client = None
    if orchestrator is None:
        if provider is None:
            provider = own_client = get_gemini_client()
        orchestrator = JobOrchestrator(provider, timeout=settings.video_timeout)

    try:
        return await orchestrator.submit_and_await(
            request,
            poll_interval=settings.video_poll_interval,
            on_progress=on_progress,
        )
    finally:
        if own_client is not None:
            await own_client.close()


def save_artifact(artifact: Artifact, job_id: str, output_dir: Path | None = None) -> Path:
    """Write a video artifact to disk and return its path."""
    output_dir = Path(output_dir or settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    path = output_dir / f"{job_id}.mp4"
    path.write_bytes(artifact.data)

    logger.info(f"Saved video {path} ({artifact.size_bytes} bytes)")
    return path
