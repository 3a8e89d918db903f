"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta en el borde (formularios/CLI) y documentación
  autocontenida (Field) sin acoplar el Core a librerías de I/O.
- Los alias conservan los nombres del wire format (camelCase) mientras el
  código Python usa snake_case.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se genera.
- Las respuestas son inmutables: solo nacen del decoder y se descartan al
  regenerar.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.errors import ProviderError


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class MenuRequest(_Request):
    """Datos de un plato para generar contenido de menú."""

    ingredients: str = Field(..., min_length=1, description="Ingredientes principales.")
    dish_type: str = Field(..., alias="dishType", min_length=1, description="Tipo de plato (p.ej. 'Main Course').")
    cuisine: str = Field(default="", description="Cocina/estilo (opcional).")
    notes: str = Field(default="", description="Notas adicionales (opcional).")
    language: str = Field(default="", description="Idioma de salida (opcional, por defecto English).")

    @classmethod
    def from_seasonal(cls, suggestion: SeasonalDishSuggestion, *, language: str = "") -> MenuRequest:
        """Prellena el formulario de menú con una sugerencia de temporada.

        La cocina queda vacía para que el modelo la infiera.
        """

        return cls(
            ingredients=suggestion.ingredients,
            dishType="Special",
            cuisine="",
            notes=f"Seasonal Special: {suggestion.description}",
            language=language,
        )


class AppointmentRequest(_Request):
    """Contexto de una reserva para generar mensajes al cliente."""

    business_type: str = Field(..., alias="businessType", min_length=1, description="Tipo de negocio.")
    service: str = Field(..., min_length=1, description="Servicio solicitado.")
    time: str = Field(..., min_length=1, description="Fecha y hora (texto libre o ISO 8601).")
    language: str = Field(..., min_length=1, description="Idioma preferido del cliente.")
    customer_message: str = Field(
        default="",
        alias="customerMessage",
        description="Mensaje del cliente para análisis de sentimiento (opcional).",
    )


class EventRequest(_Request):
    """Detalles de un evento local a promocionar."""

    event_name: str = Field(..., alias="eventName", min_length=1)
    event_type: str = Field(..., alias="eventType", min_length=1)
    date_time: str = Field(..., alias="dateTime", min_length=1)
    location: str = Field(..., min_length=1)
    highlights: str = Field(default="")
    target_audience: str = Field(default="", alias="targetAudience")


class _Response(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    def to_wire(self) -> dict[str, object]:
        """Serializa con los nombres de campo del schema."""

        return self.model_dump(mode="json", by_alias=True)


class MenuResponse(_Response):
    menu_description: str = Field(default="", alias="menuDescription")
    social_media_caption: str = Field(default="", alias="socialMediaCaption")
    image_suggestion: str = Field(default="", alias="imageSuggestion")
    nutritional_info: str = Field(default="", alias="nutritionalInfo")
    promotional_offer: str = Field(default="", alias="promotionalOffer")


class SeasonalDishSuggestion(_Response):
    dish_name: str = Field(default="", alias="dishName")
    ingredients: str = Field(default="")
    description: str = Field(default="")


class AppointmentResponse(_Response):
    booking_response: str = Field(default="", alias="bookingResponse")
    reminder_message: str = Field(default="", alias="reminderMessage")
    rescheduling_option: str = Field(default="", alias="reschedulingOption")
    upsell_suggestion: str = Field(default="", alias="upsellSuggestion")
    sentiment_analysis: str = Field(default="", alias="sentimentAnalysis")


class EventResponse(_Response):
    social_media_caption: str = Field(default="", alias="socialMediaCaption")
    banner_text: str = Field(default="", alias="bannerText")
    image_suggestion: str = Field(default="", alias="imageSuggestion")
    hashtags: tuple[str, ...] = Field(default=())
    engagement_questions: tuple[str, ...] = Field(default=(), alias="engagementQuestions")
    video_script_concept: str = Field(default="", alias="videoScriptConcept")


class ImageAsset(BaseModel):
    """Imagen inline devuelta por el proveedor (base64)."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(..., min_length=1, description="Mime type declarado (p.ej. 'image/png').")
    data: str = Field(..., min_length=1, description="Bytes de la imagen codificados en base64.")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    @property
    def extension(self) -> str:
        subtype = self.mime_type.split("/", 1)[-1].lower()
        return "jpg" if subtype == "jpeg" else subtype

    def as_bytes(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass(frozen=True)
class GenerationOutcome:
    """Resultado de una llamada al proveedor: texto crudo o un fallo tipado, nunca ambos."""

    text: str | None = None
    error: ProviderError | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.error is None):
            raise ValueError("GenerationOutcome requires exactly one of text or error")

    @classmethod
    def success(cls, text: str) -> "GenerationOutcome":
        return cls(text=text)

    @classmethod
    def failure(cls, error: ProviderError) -> "GenerationOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.text or ""
