"""
Pydantic models for API request/response schemas.
"""

from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field

from ..state import Product, StudioState


class ProductIdeaRequest(BaseModel):
    """Step 1 input."""

    idea: str = Field(..., min_length=1, description="Initial product idea")


class DescriptionRequest(BaseModel):
    """Step 2 input."""

    product: Product


class DescriptionResponse(BaseModel):
    description: str


class ImagesRequest(BaseModel):
    """Step 3 input."""

    product: Product
    description: str = Field(..., min_length=1)


class ImagesResponse(BaseModel):
    images: list[str] = Field(description="Base64-encoded JPEG images")


class VideoRequest(BaseModel):
    """Step 4 input."""

    product: Product
    description: str = Field(..., min_length=1)
    reference_image: str = Field(
        ...,
        min_length=1,
        description="Base64 image (or data URL) used as product reference",
    )


class PipelineRequest(BaseModel):
    """Run all four steps from a single idea."""

    idea: str = Field(..., min_length=1)


class JobResponse(BaseModel):
    """Status of a background video or pipeline job."""

    job_id: str
    kind: Literal["video", "pipeline"] = "video"
    status: str = Field(description="pending, running, completed, failed, cancelled")
    progress_message: str | None = None
    error: str | None = None
    video_url: str | None = None
    state: StudioState | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None


class LogoRequest(BaseModel):
    logo: str = Field(..., description="Image data URL")


class LogoResponse(BaseModel):
    logo: str | None = None


class HealthResponse(BaseModel):
    """Service health check response."""

    status: str
    version: str
    gemini_configured: bool
    gemini_available: bool
