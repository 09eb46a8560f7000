"""Generation backends and long-running job orchestration"""

from .gemini_client import GeminiClient
from .jobs import (
    Artifact,
    DownloadError,
    GenerationError,
    GenerationRequest,
    Job,
    JobStatus,
    JobTimeoutError,
    PollError,
    ProviderError,
    StudioError,
    SubmissionError,
)
from .orchestrator import JobOrchestrator
from .progress import ProgressMessages

__all__ = [
    "GeminiClient",
    "JobOrchestrator",
    "ProgressMessages",
    "Artifact",
    "GenerationRequest",
    "Job",
    "JobStatus",
    "StudioError",
    "ProviderError",
    "SubmissionError",
    "PollError",
    "JobTimeoutError",
    "DownloadError",
    "GenerationError",
]
