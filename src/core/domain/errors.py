"""Taxonomía de errores del Core.

Por qué aquí:
- Los adaptadores traducen las excepciones del SDK a estos tipos, así el Core
  y la CLI nunca dependen de `openai` para decidir qué mostrar.
- El decode tolerante no usa excepciones; `DecodeError` solo existe en modo estricto.
"""

from __future__ import annotations

from enum import Enum


class BizBoostError(Exception):
    """Raíz de todos los errores propios de la aplicación."""


class MissingCredentialsError(BizBoostError):
    """No hay API key para un proveedor remoto."""


class FailureKind(str, Enum):
    """Categoría de un fallo de transporte o del servicio generativo."""

    TIMEOUT = "timeout"
    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    BAD_REQUEST = "bad_request"
    SERVICE = "service"


class ProviderError(BizBoostError):
    """Fallo del servicio generativo (red, auth, cuota, request inválido)."""

    def __init__(
        self,
        message: str,
        *,
        kind: FailureKind = FailureKind.SERVICE,
        status_code: int | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.retry_after = retry_after

    def __repr__(self) -> str:
        return f"ProviderError(kind={self.kind.value!r}, status_code={self.status_code!r}, message={str(self)!r})"


class GenerationFailedError(BizBoostError):
    """La generación de texto no pudo completarse; el usuario puede reintentar."""

    def __init__(self, domain: str, cause: ProviderError) -> None:
        super().__init__(f"{domain} generation failed: {cause}")
        self.domain = domain
        self.cause = cause

    @property
    def kind(self) -> FailureKind:
        return self.cause.kind


class DecodeError(BizBoostError):
    """La respuesta del modelo no cumple el schema (solo en modo estricto)."""
