"""Decodificación de la salida del modelo a respuestas tipadas.

Política por defecto (tolerante):
- Texto vacío, no-JSON o un JSON que no es objeto se decodifica como `{}`.
- Cada campo del schema toma su valor si el tipo encaja; si no, su valor cero
  (`""` para strings, `()` para arrays).
- Nunca lanza: preferimos una respuesta con campos vacíos a perder la
  interacción, porque no hay reintento automático.

Modo estricto (`strict=True`): lanza `DecodeError` en esos mismos casos.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel

from core.domain.errors import DecodeError
from core.domain.schemas import FieldKind, FieldSpec, OutputSchema

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Obtiene el primer objeto JSON presente en la respuesta del proveedor.

    Acepta el objeto tal cual, dentro de un fence ```json``` o como el tramo
    `{...}` más externo del texto. Devuelve None si no hay objeto válido.
    """

    stripped = (text or "").strip()
    if not stripped:
        return None

    candidates: list[str] = []
    match = _JSON_FENCE_RE.search(stripped)
    if match:
        candidates.append(match.group(1))
    candidates.append(stripped)
    start = stripped.find("{")
    end = stripped.rfind("}")
    if 0 <= start < end:
        candidates.append(stripped[start : end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def _coerce(value: Any, field: FieldSpec) -> tuple[Any, bool]:
    """Devuelve (valor normalizado, encajaba_el_tipo)."""

    if field.kind is FieldKind.STRING_ARRAY:
        if isinstance(value, list):
            return tuple(str(item) for item in value if item is not None), True
        return (), False
    if isinstance(value, str):
        return value, True
    # Números ("nutritionalInfo": 450) se conservan como texto; no encajan en modo estricto.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value), False
    return "", False


def decode_response(
    text: str | None,
    schema: OutputSchema,
    response_type: type[ResponseT],
    *,
    strict: bool = False,
) -> ResponseT:
    """Convierte el texto crudo del modelo en `response_type` según `schema`."""

    data = extract_json_object(text or "")
    if data is None:
        if strict:
            raise DecodeError(f"{schema.name}: response is not a JSON object")
        logger.debug("%s: undecodable response, falling back to empty fields", schema.name)
        data = {}

    values: dict[str, Any] = {}
    mismatched: list[str] = []
    for name, field in schema.properties.items():
        raw = data.get(name)
        value, fits = _coerce(raw, field)
        if not fits and (field.required or raw is not None):
            mismatched.append(name)
        values[name] = value

    if mismatched:
        if strict:
            raise DecodeError(f"{schema.name}: missing or ill-typed fields: {', '.join(mismatched)}")
        if data:
            logger.debug("%s: defaulted fields %s", schema.name, ", ".join(mismatched))

    return response_type.model_validate(values)
