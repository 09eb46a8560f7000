"""
Gemini API Client - text, image and video generation.

Uses the google-genai SDK for generation calls and aiohttp for fetching
finished video files.

Video workflow:
1. Start a generation operation with models.generate_videos
2. Poll the operation with operations.get until done
3. Download the file at response.generated_videos[0].video.uri
"""

import asyncio
import logging
from typing import Any

import aiohttp
import httpx
from google import genai
from google.genai import errors, types

from ..config import settings
from .jobs import (
    DownloadError,
    GenerationError,
    GenerationRequest,
    Job,
    JobStatus,
    PollError,
    SubmissionError,
)

logger = logging.getLogger(__name__)

# google-genai raises through aiohttp when it is installed, httpx otherwise
SDK_ERRORS = (
    errors.APIError,
    httpx.HTTPError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
)


class GeminiClient:
    """
    Client for the Gemini API family (Gemini text, Imagen, Veo).

    Implements the JobProvider protocol used by the JobOrchestrator.
    """

    def __init__(
        self,
        api_key: str | None = None,
        client: genai.Client | None = None,
    ):
        self.api_key = api_key or settings.gemini_api_key
        if client is None:
            if not self.api_key:
                raise ValueError(
                    "GEMINI_API_KEY not provided. Set GEMINI_API_KEY environment "
                    "variable or pass api_key parameter."
                )
            client = genai.Client(api_key=self.api_key)
        self.client = client
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session with auth headers."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={settings.gemini_download_header: self.api_key},
                timeout=aiohttp.ClientTimeout(total=settings.download_timeout),
            )
        return self._session

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    # =========================================================================
    # Text and images
    # =========================================================================

    async def generate_text(
        self,
        prompt: str,
        response_schema: Any = None,
        model: str | None = None,
    ) -> str:
        """
        Generate text, optionally constrained to a JSON schema.

        Args:
            prompt: Full prompt text
            response_schema: Pydantic model (or schema) for JSON output
            model: Override for settings.text_model

        Returns:
            The response text (JSON when a schema is given)
        """
        config = None
        if response_schema is not None:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=response_schema,
            )

        try:
            response = await self.client.aio.models.generate_content(
                model=model or settings.text_model,
                contents=prompt,
                config=config,
            )
        except SDK_ERRORS as e:
            raise GenerationError(f"Text generation failed: {e}") from e

        if not response.text:
            raise GenerationError("Text generation returned an empty response")

        return response.text

    async def generate_images(self, request: GenerationRequest) -> list[bytes]:
        """Generate images and return their raw bytes."""
        try:
            response = await self.client.aio.models.generate_images(
                model=request.model,
                prompt=request.prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=request.number_of_outputs,
                    output_mime_type=request.output_mime_type,
                    aspect_ratio=request.aspect_ratio,
                ),
            )
        except SDK_ERRORS as e:
            raise GenerationError(f"Image generation failed: {e}") from e

        images = [
            generated.image.image_bytes
            for generated in (response.generated_images or [])
            if generated.image and generated.image.image_bytes
        ]
        if not images:
            raise GenerationError("Image generation returned no images")

        logger.info(f"Generated {len(images)} images with {request.model}")
        return images

    # =========================================================================
    # Long-running video jobs
    # =========================================================================

    async def submit(self, request: GenerationRequest) -> Job:
        """Start a video generation operation."""
        image = None
        if request.reference_image:
            image = types.Image(
                image_bytes=request.reference_image,
                mime_type=request.reference_mime_type,
            )

        try:
            operation = await self.client.aio.models.generate_videos(
                model=request.model,
                prompt=request.prompt,
                image=image,
                config=types.GenerateVideosConfig(
                    number_of_videos=request.number_of_outputs,
                ),
            )
        except SDK_ERRORS as e:
            raise SubmissionError(f"Video submission rejected: {e}") from e

        return self._operation_to_job(operation)

    async def poll(self, job: Job) -> Job:
        """Re-query an operation by name."""
        try:
            operation = await self.client.aio.operations.get(
                types.GenerateVideosOperation(name=job.job_id)
            )
        except SDK_ERRORS as e:
            raise PollError(f"Status query for {job.job_id} failed: {e}") from e

        return self._operation_to_job(operation)

    async def download(self, uri: str) -> bytes:
        """Fetch the finished video bytes; the API key travels as a header."""
        session = await self._get_session()
        try:
            async with session.get(uri) as resp:
                if resp.status != 200:
                    raise DownloadError(
                        f"Error downloading video: {resp.status} {resp.reason}",
                        status=resp.status,
                    )
                data = await resp.read()
        except aiohttp.ClientError as e:
            raise DownloadError(f"Error downloading video: {e}") from e
        except asyncio.TimeoutError as e:
            raise DownloadError("Video download timed out") from e

        logger.info(f"Downloaded video ({len(data)} bytes)")
        return data

    def _operation_to_job(self, operation: Any) -> Job:
        """Translate a google-genai operation into a Job snapshot."""
        if not operation.done:
            return Job(job_id=operation.name, status=JobStatus.PENDING)

        if operation.error:
            error = operation.error
            reason = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            return Job(job_id=operation.name, status=JobStatus.DONE, failure_reason=reason)

        result_uri = None
        videos = operation.response.generated_videos if operation.response else None
        if videos and videos[0].video:
            result_uri = videos[0].video.uri

        return Job(job_id=operation.name, status=JobStatus.DONE, result_uri=result_uri)

    async def check_health(self) -> bool:
        """Check if the API key is accepted by listing models."""
        try:
            pager = await self.client.aio.models.list(config={"page_size": 1})
            return pager is not None
        except SDK_ERRORS as e:
            logger.warning(f"Gemini health check failed: {e}")
            return False


# =============================================================================
# Convenience Functions
# =============================================================================


def get_gemini_client(api_key: str | None = None) -> GeminiClient:
    """Get a Gemini client instance."""
    return GeminiClient(api_key)


def is_gemini_configured() -> bool:
    """Check if the Gemini API is configured."""
    return bool(settings.gemini_api_key)
