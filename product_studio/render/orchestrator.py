"""
Job Orchestrator - Submit a long-running generation job, poll it, fetch the result.

Workflow:
1. Submit the request to the provider (the job may already be done)
2. While pending: report progress, sleep for the poll interval, re-query
3. Once done: download the artifact from the result URI
4. Hand the artifact to the caller and forget the job

Polls are strictly sequential. Transient poll/download failures are retried
with exponential backoff; a rejected submission is terminal.
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Iterable, Protocol

from ..config import settings
from .jobs import (
    Artifact,
    DownloadError,
    GenerationRequest,
    Job,
    JobTimeoutError,
    PollError,
    ProviderError,
)
from .progress import ProgressMessages, VIDEO_PROGRESS_MESSAGES

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], Awaitable[None] | None]
SleepFunc = Callable[[float], Awaitable[None]]


class JobProvider(Protocol):
    """Remote service that runs long-running generation jobs."""

    async def submit(self, request: GenerationRequest) -> Job:
        ...

    async def poll(self, job: Job) -> Job:
        ...

    async def download(self, uri: str) -> bytes:
        ...


class JobOrchestrator:
    """
    Drives one job from submission to artifact.

    Holds no per-job state: every call to submit_and_await is independent,
    so one orchestrator can serve concurrent jobs.
    """

    def __init__(
        self,
        provider: JobProvider,
        max_retries: int | None = None,
        timeout: float | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.provider = provider
        self.max_retries = settings.max_retries if max_retries is None else max_retries
        self.timeout = timeout
        self._sleep = sleep

    async def submit_and_await(
        self,
        request: GenerationRequest,
        poll_interval: float | None = None,
        on_progress: ProgressCallback | None = None,
        messages: Iterable[str] = VIDEO_PROGRESS_MESSAGES,
    ) -> Artifact:
        """
        Submit a request and wait for its artifact.

        Args:
            request: The generation request to submit
            poll_interval: Seconds between status checks (default from settings)
            on_progress: Called with a rotating message on every poll tick
            messages: Message set to rotate through

        Returns:
            The downloaded artifact

        Raises:
            SubmissionError: The provider rejected the request
            PollError: Status queries kept failing after retries
            JobTimeoutError: Accumulated wait would exceed the timeout
            ProviderError: The provider reported the job as failed
            DownloadError: No result URI, or the download failed
        """
        if poll_interval is None:
            poll_interval = settings.video_poll_interval
        progress = ProgressMessages(messages)

        job = await self.provider.submit(request)
        logger.info(f"Submitted job {job.job_id} ({request.model})")

        waited = 0.0
        polls = 0
        try:
            while not job.done:
                # At least one poll runs before the timeout applies
                if self.timeout is not None and polls and waited + poll_interval > self.timeout:
                    raise JobTimeoutError(
                        f"Job {job.job_id} did not complete within {self.timeout}s"
                    )

                await self._notify(on_progress, next(progress))
                await self._sleep(poll_interval)
                waited += poll_interval

                job = await self._poll_with_retry(job)
                polls += 1
                logger.debug(f"Job {job.job_id} status: {job.status.value} (poll {polls})")
        except asyncio.CancelledError:
            logger.info(f"Job {job.job_id} cancelled after {polls} polls")
            raise

        if job.failure_reason:
            raise ProviderError(f"Job {job.job_id} failed: {job.failure_reason}")

        if not job.result_uri:
            raise DownloadError(
                f"Job {job.job_id} completed but returned no download link"
            )

        logger.info(f"Job {job.job_id} completed after {polls} polls, downloading result")
        data = await self._download_with_retry(job.result_uri)

        return Artifact(
            data=data,
            mime_type=request.output_mime_type or settings.video_mime_type,
        )

    async def _notify(self, on_progress: ProgressCallback | None, message: str) -> None:
        if on_progress is None:
            return
        try:
            result = on_progress(message)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.warning(f"Progress callback failed, continuing: {e}")

    async def _poll_with_retry(self, job: Job) -> Job:
        """Query job status, retrying transient failures with backoff."""
        for attempt in range(self.max_retries + 1):
            try:
                return await self.provider.poll(job)
            except PollError as e:
                if attempt >= self.max_retries:
                    raise
                logger.warning(
                    f"Poll for job {job.job_id} failed (attempt {attempt + 1}): {e}"
                )
                await self._sleep(2 ** attempt)  # Exponential backoff

        raise PollError(f"Polling job {job.job_id} failed")

    async def _download_with_retry(self, uri: str) -> bytes:
        """Fetch artifact bytes; only transport faults and 5xx are retried."""
        for attempt in range(self.max_retries + 1):
            try:
                return await self.provider.download(uri)
            except DownloadError as e:
                if not e.transient or attempt >= self.max_retries:
                    raise
                logger.warning(f"Download failed (attempt {attempt + 1}): {e}")
                await self._sleep(2 ** attempt)

        raise DownloadError(f"Download of {uri} failed")
