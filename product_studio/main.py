"""
Product Studio - FastAPI Application Entry Point

Run with: uvicorn product_studio.main:app --host 0.0.0.0 --port 8095 --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import router
from .config import settings
from . import __version__

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("product_studio")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    # Startup
    settings.output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Starting Product Studio v{__version__}")
    logger.info(f"Text model: {settings.text_model}")
    logger.info(f"Image model: {settings.image_model}")
    logger.info(f"Video model: {settings.video_model}")
    logger.info(f"Output dir: {settings.output_dir}")

    yield

    # Shutdown
    logger.info("Shutting down Product Studio")


app = FastAPI(
    title="Product Studio",
    description="AI-assisted product ideation, ad copy, images and video",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": "Product Studio",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/studio/health",
    }


@app.get("/health")
async def health():
    """Simple health check."""
    return {"status": "ok", "version": __version__}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "product_studio.main:app",
        host=settings.studio_service_host,
        port=settings.studio_service_port,
        reload=True,
    )
