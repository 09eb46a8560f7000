"""
Ideation Agent - Turns a free-text idea into a structured product concept.

Step 1 of the studio workflow.
"""

import logging

from pydantic import ValidationError

from ..render.gemini_client import get_gemini_client
from ..render.jobs import GenerationError
from ..state import Product
from .prompts import product_idea_prompt
from .utils import strip_code_fences

logger = logging.getLogger(__name__)


async def generate_product_idea(idea: str, provider=None) -> Product:
    """
    Generate a product concept for the Peruvian market.

    Args:
        idea: The user's starting idea
        provider: Text provider (defaults to a GeminiClient)

    Returns:
        The parsed Product

    Raises:
        GenerationError: Generation failed or returned malformed JSON
    """
    if not idea.strip():
        raise ValueError("An idea is required")

    provider = provider or get_gemini_client()

    try:
        content = await provider.generate_text(
            product_idea_prompt(idea),
            response_schema=Product,
        )
        product = Product.model_validate_json(strip_code_fences(content))
    except (GenerationError, ValidationError) as e:
        logger.error(f"Error generating product idea: {e}")
        raise GenerationError(
            "No se pudo generar la idea del producto. Inténtalo de nuevo."
        ) from e

    logger.info(f"Generated product concept: {product.name}")
    return product
