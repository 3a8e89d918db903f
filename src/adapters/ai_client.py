"""Adaptador del proveedor generativo (Gemini via OpenAI SDK).

Responsabilidad:
- Enviar (prompt, schema, instrucción, modelo) con `response_format`
  json_schema para que el servicio devuelva JSON parseable.
- Traducir cualquier fallo del SDK a un `ProviderError` tipado dentro de un
  `GenerationOutcome` (un único intento, sin reintentos).
- Generar imágenes cuadradas y extraer el primer payload inline.
"""

from __future__ import annotations

import logging
from typing import Any

from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI, OpenAIError

from core.config import AppSettings
from core.domain.errors import FailureKind, MissingCredentialsError, ProviderError
from core.domain.models import GenerationOutcome, ImageAsset
from core.domain.schemas import OutputSchema

logger = logging.getLogger(__name__)

SQUARE_IMAGE_SIZE = "1024x1024"
DEFAULT_IMAGE_MIME = "image/png"
IMAGES_UNSUPPORTED_MESSAGE = "No image model configured for this provider (BIZBOOST_IMAGE_MODEL is empty)."

_MIME_BY_FORMAT = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "webp": "image/webp",
}


def _is_local_base_url(url: str) -> bool:
    url_l = (url or "").strip().lower()
    return url_l.startswith("http://localhost") or url_l.startswith("http://127.0.0.1") or url_l.startswith(
        "http://0.0.0.0"
    )


def _safe_retry_after_seconds(exc: Exception) -> float | None:
    response = getattr(exc, "response", None)
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    value = headers.get("retry-after") or headers.get("Retry-After")
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def _kind_for_status(status: int | None) -> FailureKind:
    if status in (401, 403):
        return FailureKind.AUTHENTICATION
    if status == 429:
        return FailureKind.RATE_LIMIT
    if status in (400, 404, 422):
        return FailureKind.BAD_REQUEST
    return FailureKind.SERVICE


def to_provider_error(exc: Exception) -> ProviderError:
    """Normaliza excepciones del SDK (y cualquier otra) a `ProviderError`."""

    if isinstance(exc, ProviderError):
        return exc
    # APITimeoutError hereda de APIConnectionError: el orden importa.
    if isinstance(exc, APITimeoutError):
        return ProviderError(str(exc) or "Request timed out.", kind=FailureKind.TIMEOUT)
    if isinstance(exc, APIConnectionError):
        return ProviderError(str(exc) or "Connection error.", kind=FailureKind.CONNECTION)
    if isinstance(exc, APIStatusError):
        status = getattr(exc, "status_code", None)
        return ProviderError(
            str(exc),
            kind=_kind_for_status(status),
            status_code=status,
            retry_after=_safe_retry_after_seconds(exc),
        )
    return ProviderError(f"{type(exc).__name__}: {exc}", kind=FailureKind.SERVICE)


def build_openai_client(settings: AppSettings) -> AsyncOpenAI:
    """Crea el `AsyncOpenAI` del proceso a partir de la configuración."""

    api_key = (settings.ai_api_key or "").strip()
    if not api_key:
        # Sin API key: un provider local OpenAI-compatible acepta un dummy.
        if not _is_local_base_url(settings.ai_base_url):
            raise MissingCredentialsError(
                "No AI API key configured. Set BIZBOOST_AI_API_KEY or run `bizboost doctor setup-ai`."
            )
        api_key = "local"

    return AsyncOpenAI(
        api_key=api_key,
        base_url=settings.ai_base_url,
        timeout=settings.ai_timeout_seconds,
        max_retries=0,
    )


def _response_format(schema: OutputSchema) -> dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": schema.name,
            "strict": True,
            "schema": schema.to_json_schema(),
        },
    }


def _accepts_response_format(model: str) -> bool:
    # La familia gpt-image siempre devuelve base64 y rechaza el parámetro.
    return not model.lower().startswith("gpt-image")


def _first_message_text(response: Any) -> str:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    return (getattr(message, "content", None) or "").strip()


def _extract_first_image(response: Any) -> ImageAsset | None:
    fmt = (getattr(response, "output_format", None) or "").lower()
    mime = _MIME_BY_FORMAT.get(fmt, DEFAULT_IMAGE_MIME)
    for item in getattr(response, "data", None) or []:
        b64 = getattr(item, "b64_json", None)
        if isinstance(b64, str) and b64:
            return ImageAsset(mime_type=mime, data=b64)
    return None


class OpenAICompatibleGenerator:
    """Implementa `GenerativeClient` sobre un endpoint compatible OpenAI."""

    def __init__(self, settings: AppSettings, *, client: AsyncOpenAI | None = None) -> None:
        self._settings = settings
        self._client = client or build_openai_client(settings)

    async def generate(
        self,
        prompt: str,
        schema: OutputSchema,
        system_instruction: str,
        model: str | None = None,
    ) -> GenerationOutcome:
        used_model = model or self._settings.text_model
        try:
            response = await self._client.chat.completions.create(
                model=used_model,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": prompt},
                ],
                response_format=_response_format(schema),  # type: ignore[arg-type]
            )
        except (OpenAIError, OSError) as exc:
            error = to_provider_error(exc)
            logger.warning("Provider call failed (model=%s): %r", used_model, error)
            return GenerationOutcome.failure(error)

        return GenerationOutcome.success(_first_message_text(response))

    async def generate_image(self, prompt: str) -> ImageAsset | None:
        model = self._settings.image_model.strip()
        if not model:
            raise ProviderError(IMAGES_UNSUPPORTED_MESSAGE, kind=FailureKind.BAD_REQUEST)

        kwargs: dict[str, Any] = {"model": model, "prompt": prompt, "n": 1, "size": SQUARE_IMAGE_SIZE}
        if _accepts_response_format(model):
            kwargs["response_format"] = "b64_json"
        try:
            response = await self._client.images.generate(**kwargs)
        except (OpenAIError, OSError) as exc:
            raise to_provider_error(exc) from exc
        return _extract_first_image(response)

    async def aclose(self) -> None:
        await self._client.close()
