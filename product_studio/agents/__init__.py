"""Workflow step agents for the product studio"""

from .ideation import generate_product_idea
from .copywriting import generate_commercial_description
from .imagery import generate_product_images
from .video import generate_product_video, save_artifact
from .feedback import analyze_feedback, generate_feedback_recommendations, simulated_feedback

__all__ = [
    "generate_product_idea",
    "generate_commercial_description",
    "generate_product_images",
    "generate_product_video",
    "save_artifact",
    "analyze_feedback",
    "generate_feedback_recommendations",
    "simulated_feedback",
]
