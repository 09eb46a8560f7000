"""
Configuration for Product Studio

Loads environment variables and provides typed configuration.
"""

from pathlib import Path
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Gemini API Configuration
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    gemini_download_header: str = "x-goog-api-key"

    # Models
    text_model: str = "gemini-2.5-flash"
    image_model: str = "imagen-4.0-generate-001"
    video_model: str = "veo-3.0-generate-001"

    # Image generation defaults
    image_count: int = 2
    image_aspect_ratio: str = "16:9"
    image_mime_type: str = "image/jpeg"

    # Video generation defaults
    video_count: int = 1
    video_mime_type: str = "video/mp4"
    video_poll_interval: float = 10.0  # seconds between status checks
    video_timeout: float | None = 900.0  # None disables the ceiling
    max_retries: int = 2  # Retry transient poll/download failures
    download_timeout: float = 120.0
    max_finished_jobs: int = 100  # Finished job records kept in memory

    # Service Configuration
    studio_service_host: str = "0.0.0.0"
    studio_service_port: int = 8095
    log_level: str = "INFO"

    # Storage
    output_dir: Path = Path("output")
    preferences_path: Path = Path("studio_preferences.json")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Convenience exports
settings = get_settings()
