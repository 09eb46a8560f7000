"""REST API endpoints for the product studio"""

from .routes import router
from .models import (
    JobResponse,
    ProductIdeaRequest,
    VideoRequest,
)

__all__ = [
    "router",
    "JobResponse",
    "ProductIdeaRequest",
    "VideoRequest",
]
