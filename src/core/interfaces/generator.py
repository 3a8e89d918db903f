"""Contrato del cliente generativo.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el adaptador OpenAI-compatible y los fakes de tests sean
  intercambiables sin acoplar el Core al SDK.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import GenerationOutcome, ImageAsset
from core.domain.schemas import OutputSchema


@runtime_checkable
class GenerativeClient(Protocol):
    """Contrato mínimo para un proveedor de texto estructurado e imágenes.

    Reglas de diseño:
    - Ambos métodos son asíncronos: cada uno hace exactamente un round trip.
    - `generate` nunca propaga excepciones del transporte; devuelve un
      `GenerationOutcome` con el fallo tipado.
    - `generate_image` devuelve None si la respuesta no trae imagen; los
      errores de transporte sí se propagan (los absorbe la capa visual).
    """

    async def generate(
        self,
        prompt: str,
        schema: OutputSchema,
        system_instruction: str,
        model: str | None = None,
    ) -> GenerationOutcome:
        ...

    async def generate_image(self, prompt: str) -> ImageAsset | None:
        ...
