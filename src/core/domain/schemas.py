"""Registro de schemas de salida.

Por qué un registro explícito:
- El mismo contrato sirve para restringir la generación (JSON Schema enviado
  al proveedor) y para decodificar la respuesta campo a campo.
- Son datos puros y constantes: un schema por dominio más el de sugerencia
  de temporada.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Domain(str, Enum):
    """Casos de uso de generación de contenido."""

    MENU = "menu"
    APPOINTMENT = "appointment"
    EVENT = "event"
    SEASONAL = "seasonal"


class FieldKind(str, Enum):
    STRING = "string"
    STRING_ARRAY = "string_array"

    def zero_value(self) -> str | list[str]:
        return [] if self is FieldKind.STRING_ARRAY else ""


class FieldSpec(BaseModel):
    """Declaración de un campo de salida."""

    model_config = ConfigDict(frozen=True)

    kind: FieldKind = Field(default=FieldKind.STRING)
    required: bool = Field(default=True)
    description: str = Field(..., min_length=1)

    def to_json_schema(self) -> dict[str, Any]:
        if self.kind is FieldKind.STRING_ARRAY:
            return {"type": "array", "items": {"type": "string"}, "description": self.description}
        return {"type": "string", "description": self.description}


class OutputSchema(BaseModel):
    """Contrato de forma para la salida del modelo (nombres de campo en wire format)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Identificador enviado al proveedor.")
    properties: dict[str, FieldSpec] = Field(..., min_length=1)

    @property
    def required_fields(self) -> list[str]:
        return [name for name, field in self.properties.items() if field.required]

    def to_json_schema(self) -> dict[str, Any]:
        """JSON Schema estricto (objeto cerrado) para `response_format`."""

        return {
            "type": "object",
            "properties": {name: field.to_json_schema() for name, field in self.properties.items()},
            "required": self.required_fields,
            "additionalProperties": False,
        }


def _schema(name: str, fields: dict[str, FieldSpec]) -> OutputSchema:
    return OutputSchema(name=name, properties=fields)


MENU_SCHEMA = _schema(
    "menu_content",
    {
        "menuDescription": FieldSpec(description="A short, appealing description for a menu."),
        "socialMediaCaption": FieldSpec(description="A catchy social media post with emojis and hashtags."),
        "imageSuggestion": FieldSpec(description="A text description of a visual concept for the dish."),
        "nutritionalInfo": FieldSpec(
            description="Estimated calories and key macros (e.g., 'Approx. 450kcal, High Protein')."
        ),
        "promotionalOffer": FieldSpec(
            description="A catchy promotional discount phrase (e.g., 'Buy 1 Get 1 Free on Fridays!')."
        ),
    },
)

SEASONAL_SCHEMA = _schema(
    "seasonal_dish",
    {
        "dishName": FieldSpec(description="Name of the seasonal dish."),
        "ingredients": FieldSpec(description="List of key ingredients."),
        "description": FieldSpec(description="Why it fits the current season."),
    },
)

APPOINTMENT_SCHEMA = _schema(
    "appointment_messages",
    {
        "bookingResponse": FieldSpec(description="Polite booking confirmation message."),
        "reminderMessage": FieldSpec(description="Follow-up reminder message."),
        "reschedulingOption": FieldSpec(description="A polite message offering rescheduling options."),
        "upsellSuggestion": FieldSpec(description="A subtle suggestion for an additional service."),
        "sentimentAnalysis": FieldSpec(
            description="Analysis of the customer's tone if provided (e.g., 'Neutral', 'Frustrated')."
        ),
    },
)

EVENT_SCHEMA = _schema(
    "event_promotion",
    {
        "socialMediaCaption": FieldSpec(description="Engaging caption for social media."),
        "bannerText": FieldSpec(description="Text layout for a poster or banner."),
        "imageSuggestion": FieldSpec(description="Image or illustration idea fitting the event theme."),
        "hashtags": FieldSpec(kind=FieldKind.STRING_ARRAY, description="List of trending/relevant hashtags."),
        "engagementQuestions": FieldSpec(
            kind=FieldKind.STRING_ARRAY,
            description="Questions to ask audience to drive engagement.",
        ),
        "videoScriptConcept": FieldSpec(
            description="A short concept or script for a promo video (max 2 sentences)."
        ),
    },
)

SCHEMAS: Mapping[Domain, OutputSchema] = MappingProxyType(
    {
        Domain.MENU: MENU_SCHEMA,
        Domain.APPOINTMENT: APPOINTMENT_SCHEMA,
        Domain.EVENT: EVENT_SCHEMA,
        Domain.SEASONAL: SEASONAL_SCHEMA,
    }
)


def get_schema(domain: Domain) -> OutputSchema:
    return SCHEMAS[domain]
