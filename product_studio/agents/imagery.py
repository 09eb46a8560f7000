"""
Imagery Agent - Generates advertising images for a product.

Step 3 of the studio workflow. Image generation is a single request/response
call, so no job orchestration is involved.
"""

import logging

from ..config import settings
from ..render.gemini_client import get_gemini_client
from ..render.jobs import GenerationError, GenerationRequest
from ..state import Product
from .prompts import product_images_prompt
from .utils import encode_image

logger = logging.getLogger(__name__)


def build_image_request(product: Product, description: str) -> GenerationRequest:
    return GenerationRequest(
        prompt=product_images_prompt(product, description),
        model=settings.image_model,
        number_of_outputs=settings.image_count,
        aspect_ratio=settings.image_aspect_ratio,
        output_mime_type=settings.image_mime_type,
    )


async def generate_product_images(
    product: Product,
    description: str,
    provider=None,
) -> list[str]:
    """
    Generate ad images on a Peruvian summer beach theme.

    Returns:
        Base64-encoded images, in provider order
    """
    provider = provider or get_gemini_client()
    request = build_image_request(product, description)

    try:
        images = await provider.generate_images(request)
    except GenerationError as e:
        logger.error(f"Error generating images: {e}")
        raise GenerationError(
            "No se pudieron generar las imágenes. Inténtalo de nuevo."
        ) from e

    return [encode_image(image) for image in images]
