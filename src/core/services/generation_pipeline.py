"""Orquestación de generación estructurada.

Este módulo reduce los tres dominios (menú, reservas, eventos) más la
sugerencia de temporada a una única operación genérica:

    request -> prompt -> llamada con schema -> decode

Cada dominio solo aporta una tabla (`StructuredTask`) con su schema, su
instrucción de sistema y su modelo de respuesta. Los efectos secundarios
(impresión, progreso) quedan fuera: la CLI u otro entrypoint los maneja.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from core.domain.errors import GenerationFailedError, ProviderError
from core.domain.models import (
    AppointmentRequest,
    AppointmentResponse,
    EventRequest,
    EventResponse,
    ImageAsset,
    MenuRequest,
    MenuResponse,
    SeasonalDishSuggestion,
)
from core.domain.schemas import Domain, OutputSchema, get_schema
from core.interfaces.generator import GenerativeClient
from core.services.prompt_builder import DomainRequest, build_prompt, system_instruction_for
from core.services.response_decoder import decode_response
from core.services.visual_generation import generate_visual

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


@dataclass(frozen=True)
class StructuredTask(Generic[ResponseT]):
    """Parámetros de un dominio para la operación genérica."""

    domain: Domain
    schema: OutputSchema
    system_instruction: str
    response_type: type[ResponseT]


def _task(domain: Domain, response_type: type[ResponseT]) -> StructuredTask[ResponseT]:
    return StructuredTask(
        domain=domain,
        schema=get_schema(domain),
        system_instruction=system_instruction_for(domain),
        response_type=response_type,
    )


MENU_TASK = _task(Domain.MENU, MenuResponse)
APPOINTMENT_TASK = _task(Domain.APPOINTMENT, AppointmentResponse)
EVENT_TASK = _task(Domain.EVENT, EventResponse)
SEASONAL_TASK = _task(Domain.SEASONAL, SeasonalDishSuggestion)


async def run_structured(
    generator: GenerativeClient,
    task: StructuredTask[ResponseT],
    request: DomainRequest | None = None,
    *,
    model: str | None = None,
    strict: bool = False,
) -> ResponseT:
    """Ejecuta un round trip de generación estructurada.

    Raises:
        GenerationFailedError: si el proveedor falla (sin reintentos).
        DecodeError: solo con `strict=True` y salida fuera de schema.
    """

    prompt = build_prompt(task.domain, request)
    logger.debug("Generating %s content (model=%s)", task.domain.value, model or "default")

    outcome = await generator.generate(prompt, task.schema, task.system_instruction, model)
    try:
        text = outcome.unwrap()
    except ProviderError as exc:
        logger.warning("%s generation failed: %r", task.domain.value, exc)
        raise GenerationFailedError(task.domain.value, exc) from exc

    return decode_response(text, task.schema, task.response_type, strict=strict)


class MarketingAssistant:
    """Fachada por dominio sobre `run_structured`.

    Cada método hace exactamente una llamada y devuelve un awaitable; quien
    necesite un handle lo envuelve en `asyncio.create_task`. No hay
    cancelación ni reintentos: el usuario reintenta a mano.
    """

    def __init__(
        self,
        generator: GenerativeClient,
        *,
        model: str | None = None,
        strict: bool = False,
    ) -> None:
        self._generator = generator
        self._model = model
        self._strict = strict

    async def _run(self, task: StructuredTask[ResponseT], request: DomainRequest | None = None) -> ResponseT:
        return await run_structured(self._generator, task, request, model=self._model, strict=self._strict)

    async def generate_menu_content(self, request: MenuRequest) -> MenuResponse:
        return await self._run(MENU_TASK, request)

    async def generate_seasonal_suggestion(self) -> SeasonalDishSuggestion:
        return await self._run(SEASONAL_TASK)

    async def generate_appointment_content(self, request: AppointmentRequest) -> AppointmentResponse:
        return await self._run(APPOINTMENT_TASK, request)

    async def generate_event_content(self, request: EventRequest) -> EventResponse:
        return await self._run(EVENT_TASK, request)

    async def generate_visual(self, image_suggestion: str) -> ImageAsset | None:
        return await generate_visual(self._generator, image_suggestion)
