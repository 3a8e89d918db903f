"""Construcción de prompts por dominio.

Cada dominio aporta una tabla de datos: la frase de tarea, las líneas
`Label: valor` (con su placeholder cuando el campo opcional está vacío) y la
instrucción de sistema fija. El builder es puro y determinista.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel

from core.domain.models import AppointmentRequest, EventRequest, MenuRequest
from core.domain.schemas import Domain

DomainRequest = Union[MenuRequest, AppointmentRequest, EventRequest]

NOT_SPECIFIED = "Not specified"
NONE = "None"
GENERAL_PUBLIC = "General Public"


@dataclass(frozen=True)
class PromptLine:
    label: str
    attr: str
    placeholder: str | None = None

    def render(self, request: BaseModel) -> str:
        value = str(getattr(request, self.attr) or "").strip()
        if not value and self.placeholder is not None:
            value = self.placeholder
        return f"{self.label}: {value}"


@dataclass(frozen=True)
class PromptTemplate:
    task: str
    lines: tuple[PromptLine, ...]
    system_instruction: str

    @property
    def labels(self) -> list[str]:
        return [line.label for line in self.lines]

    def render(self, request: BaseModel | None) -> str:
        if request is None:
            if self.lines:
                raise ValueError("This prompt template requires a request")
            return self.task
        return "\n".join([self.task, *(line.render(request) for line in self.lines)])


TEMPLATES: dict[Domain, PromptTemplate] = {
    Domain.MENU: PromptTemplate(
        task="Create menu content for a restaurant dish.",
        lines=(
            PromptLine("Ingredients", "ingredients"),
            PromptLine("Type", "dish_type"),
            PromptLine("Cuisine", "cuisine", NOT_SPECIFIED),
            PromptLine("Notes", "notes", NONE),
            PromptLine("Language", "language", "English"),
        ),
        system_instruction=(
            "You are an expert restaurant marketing assistant. Create attractive menu descriptions, "
            "nutritional estimates, and promotional offers. Ensure the output language matches the "
            "requested Language."
        ),
    ),
    Domain.APPOINTMENT: PromptTemplate(
        task="Create booking messages for a small business.",
        lines=(
            PromptLine("Business Type", "business_type"),
            PromptLine("Service", "service"),
            PromptLine("Time", "time"),
            PromptLine("Customer Language Preference", "language"),
            PromptLine("Customer Message Context (if any)", "customer_message", NONE),
        ),
        system_instruction=(
            "You are a professional appointment booking assistant. Analyze customer sentiment if a "
            "message is provided. Generate polite confirmation, reminder, rescheduling, and upsell "
            "messages in the requested language."
        ),
    ),
    Domain.EVENT: PromptTemplate(
        task="Create promotional content for a local event.",
        lines=(
            PromptLine("Event Name", "event_name"),
            PromptLine("Type", "event_type"),
            PromptLine("Date/Time", "date_time"),
            PromptLine("Location", "location"),
            PromptLine("Highlights", "highlights", NONE),
            PromptLine("Target Audience", "target_audience", GENERAL_PUBLIC),
        ),
        system_instruction=(
            "You are an event promoter. Create exciting social media captions, banner texts, hashtags, "
            "and engagement hooks suitable for the target audience."
        ),
    ),
    Domain.SEASONAL: PromptTemplate(
        task="Suggest a trending seasonal dish for a restaurant menu based on the current time of year.",
        lines=(),
        system_instruction="You are a creative chef. Suggest a unique, popular seasonal dish.",
    ),
}

_REQUEST_DOMAINS: dict[type[BaseModel], Domain] = {
    MenuRequest: Domain.MENU,
    AppointmentRequest: Domain.APPOINTMENT,
    EventRequest: Domain.EVENT,
}


def domain_for(request: DomainRequest) -> Domain:
    try:
        return _REQUEST_DOMAINS[type(request)]
    except KeyError:
        raise TypeError(f"Unsupported request type: {type(request).__name__}") from None


def build_prompt(domain: Domain, request: DomainRequest | None = None) -> str:
    """Renderiza el prompt de `domain` a partir del request tipado."""

    if request is not None and domain_for(request) is not domain:
        raise TypeError(f"{type(request).__name__} does not belong to domain {domain.value!r}")
    return TEMPLATES[domain].render(request)


def system_instruction_for(domain: Domain) -> str:
    return TEMPLATES[domain].system_instruction
