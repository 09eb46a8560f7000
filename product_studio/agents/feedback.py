"""
Feedback Agent - Sentiment dashboard data and strategic recommendations.

The sentiment keywords are simulated; only the recommendations come from
the language model.
"""

import logging

from pydantic import ValidationError

from ..render.gemini_client import get_gemini_client
from ..render.jobs import GenerationError
from ..state import FeedbackRecommendations, FeedbackReport, SentimentWord
from .prompts import feedback_recommendations_prompt
from .utils import parse_bullets, strip_code_fences

logger = logging.getLogger(__name__)


SIMULATED_POSITIVE = [
    ("delicioso", 95, 0.92),
    ("refrescante", 80, 0.85),
    ("natural", 72, 0.78),
    ("perfecto", 65, 0.95),
    ("me encanta", 58, 0.89),
]

SIMULATED_NEGATIVE = [
    ("muy caro", 45, -0.85),
    ("demasiado dulce", 38, -0.65),
    ("empaque difícil", 30, -0.50),
    ("no lo encuentro", 25, -0.45),
    ("pequeño", 22, -0.70),
]


def simulated_feedback() -> tuple[list[SentimentWord], list[SentimentWord]]:
    """Return the top five positive and negative feedback keywords."""
    positive = [SentimentWord(word=w, frequency=f, score=s) for w, f, s in SIMULATED_POSITIVE]
    negative = [SentimentWord(word=w, frequency=f, score=s) for w, f, s in SIMULATED_NEGATIVE]
    return positive, negative


async def generate_feedback_recommendations(
    positive_words: list[SentimentWord],
    negative_words: list[SentimentWord],
    provider=None,
) -> FeedbackRecommendations:
    """Ask the model for an action plan, competitor analysis and timeline."""
    provider = provider or get_gemini_client()

    try:
        content = await provider.generate_text(
            feedback_recommendations_prompt(positive_words, negative_words),
            response_schema=FeedbackRecommendations,
        )
        return FeedbackRecommendations.model_validate_json(strip_code_fences(content))
    except (GenerationError, ValidationError) as e:
        logger.error(f"Error generating feedback recommendations: {e}")
        raise GenerationError(
            "No se pudieron generar las recomendaciones. Inténtalo de nuevo."
        ) from e


async def analyze_feedback(provider=None) -> FeedbackReport:
    """Build the full dashboard report from simulated feedback."""
    positive, negative = simulated_feedback()
    recommendations = await generate_feedback_recommendations(positive, negative, provider)

    return FeedbackReport(
        positive_words=positive,
        negative_words=negative,
        recommendations=recommendations,
        action_plan_items=parse_bullets(recommendations.action_plan),
        competitor_analysis_items=parse_bullets(recommendations.competitor_analysis),
        implementation_timeline_items=parse_bullets(recommendations.implementation_timeline),
    )
