"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/IA) lean config de forma consistente.
- Reemplaza el cliente global con credenciales: el entrypoint crea un
  `AppSettings` por proceso y lo pasa explícitamente al generador.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "bizboost"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "bizboost"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "bizboost"
    return Path.home() / ".config" / "bizboost"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# BizBoost user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="BIZBOOST_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    ai_api_key: str | None = Field(
        default=None,
        description="API key del proveedor generativo (Gemini u otro compatible OpenAI).",
    )
    ai_base_url: str = Field(
        default=GEMINI_OPENAI_BASE_URL,
        min_length=8,
        description="Base URL compatible OpenAI.",
    )
    text_model: str = Field(
        default="gemini-2.5-flash",
        min_length=1,
        description="Modelo para generación de texto estructurado.",
    )
    image_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Modelo con capacidad de generar imágenes (vacío: el proveedor no genera imágenes).",
    )
    ai_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout para llamadas al proveedor IA (segundos).",
    )
    strict_decode: bool = Field(
        default=False,
        description="Si es True, una respuesta fuera de schema lanza DecodeError en vez de quedar vacía.",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout para chequeos HTTP auxiliares (doctor).",
    )
    user_agent: str = Field(
        default="bizboost/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones HTTP auxiliares.",
    )

    default_language: Language = Field(
        default=Language.default(),
        description="Idioma por defecto para el contenido generado.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    def __init__(self, **values: Any) -> None:
        # Orden: proyecto primero (dev), luego config global de usuario.
        # La ruta de usuario depende de HOME/XDG_CONFIG_HOME al construir.
        values.setdefault("_env_file", (".env", str(get_user_env_file())))
        super().__init__(**values)
