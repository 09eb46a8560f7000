"""
Product Studio - AI-assisted product launch workflow

Takes a product idea through ideation, marketing copy, ad images and an ad
video. Uses Gemini for text, Imagen for images and Veo for video.
"""

__version__ = "0.1.0"

from .state import (
    StudioState,
    Page,
    Product,
    SentimentWord,
    FeedbackRecommendations,
    FeedbackReport,
)
from .graph import create_studio_pipeline, run_pipeline

__all__ = [
    "create_studio_pipeline",
    "run_pipeline",
    "StudioState",
    "Page",
    "Product",
    "SentimentWord",
    "FeedbackRecommendations",
    "FeedbackReport",
]
