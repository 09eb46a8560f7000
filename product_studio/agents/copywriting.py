"""
Copywriting Agent - Writes the commercial description for a product.

Step 2 of the studio workflow.
"""

import logging

from ..render.gemini_client import get_gemini_client
from ..render.jobs import GenerationError
from ..state import Product
from .prompts import commercial_description_prompt

logger = logging.getLogger(__name__)


async def generate_commercial_description(product: Product, provider=None) -> str:
    """Write ad copy usable for TV, e-commerce and social posts."""
    provider = provider or get_gemini_client()

    try:
        description = await provider.generate_text(commercial_description_prompt(product))
    except GenerationError as e:
        logger.error(f"Error generating commercial description: {e}")
        raise GenerationError(
            "No se pudo generar la descripción comercial. Inténtalo de nuevo."
        ) from e

    return description.strip()
