"""
Job, artifact and request models for long-running generation work.

Also defines the error hierarchy raised by the provider client and the
job orchestrator.
"""

from enum import Enum
from pydantic import BaseModel


class JobStatus(str, Enum):
    """Remote job status as reported by the provider"""

    PENDING = "pending"
    DONE = "done"


class Job(BaseModel):
    """Snapshot of a remote generation job"""

    job_id: str  # Opaque provider handle (operation name)
    status: JobStatus = JobStatus.PENDING
    result_uri: str | None = None
    failure_reason: str | None = None

    @property
    def done(self) -> bool:
        return self.status == JobStatus.DONE


class Artifact(BaseModel):
    """Immutable generated payload handed to the caller"""

    data: bytes
    mime_type: str = "video/mp4"

    class Config:
        frozen = True

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class GenerationRequest(BaseModel):
    """Everything the provider needs for one submission"""

    prompt: str
    model: str
    reference_image: bytes | None = None
    reference_mime_type: str = "image/jpeg"
    number_of_outputs: int = 1
    aspect_ratio: str | None = None
    output_mime_type: str | None = None

    class Config:
        frozen = True


# ============================================================================
# Errors
# ============================================================================


class StudioError(Exception):
    """Base class for all Product Studio failures"""


class ProviderError(StudioError):
    """Unrecoverable fault reported by the remote service"""


class SubmissionError(ProviderError):
    """The provider rejected the request at submit time"""


class PollError(ProviderError):
    """A status query failed"""


class JobTimeoutError(ProviderError):
    """The job did not complete within the configured ceiling"""


class DownloadError(StudioError):
    """The job completed but its artifact could not be obtained"""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status

    @property
    def transient(self) -> bool:
        """Transport faults and 5xx responses are worth another attempt."""
        return self.status is None or self.status >= 500


class GenerationError(StudioError):
    """A text or image generation step failed"""
