"""Generación visual a partir de una sugerencia de imagen.

Es un extra opcional: se invoca bajo demanda con el `imageSuggestion` de una
respuesta ya decodificada, y cualquier fallo se degrada a "sin imagen".
"""

from __future__ import annotations

import logging

from core.domain.models import ImageAsset
from core.interfaces.generator import GenerativeClient

logger = logging.getLogger(__name__)


async def generate_visual(generator: GenerativeClient, description: str) -> ImageAsset | None:
    """Devuelve la imagen generada para `description` o None si no hay imagen."""

    prompt = (description or "").strip()
    if not prompt:
        return None

    try:
        image = await generator.generate_image(prompt)
    except Exception:
        logger.warning("Image generation failed", exc_info=True)
        return None

    if image is None:
        logger.info("Image generation returned no image part")
    return image
