"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import GenerationFailedError
from core.domain.models import (
    AppointmentResponse,
    EventResponse,
    ImageAsset,
    MenuResponse,
    SeasonalDishSuggestion,
)


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("BizBoost AI", style="bold cyan")
    subtitle = Text("Marketing Suite • Menús • Reservas • Eventos", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _fields_table(title: str, rows: Iterable[tuple[str, str]], *, style: str) -> Table:
    table = Table(title=title, show_header=False, title_style=f"bold {style}", expand=True)
    table.add_column("Field", style=style, no_wrap=True)
    table.add_column("Value", style="white")
    for label, value in rows:
        table.add_row(label, Text(value) if value else Text("-", style="dim"))
    return table


def _bullets(items: Iterable[str]) -> str:
    return "\n".join(f"• {item}" for item in items)


def build_menu_table(result: MenuResponse) -> Table:
    return _fields_table(
        "Menu Content",
        [
            ("Menu Description", result.menu_description),
            ("Social Media Caption", result.social_media_caption),
            ("Nutritional Info", result.nutritional_info),
            ("Promotional Offer", result.promotional_offer),
            ("Image Suggestion", result.image_suggestion),
        ],
        style="orange3",
    )


def build_seasonal_panel(result: SeasonalDishSuggestion) -> Panel:
    body = Text()
    body.append((result.dish_name or "-") + "\n", style="bold")
    body.append(f"Ingredients: {result.ingredients or '-'}\n")
    body.append(result.description or "", style="dim")
    return Panel(body, title=Text("Seasonal Suggestion", style="bold orange3"), border_style="orange3")


def build_appointment_table(result: AppointmentResponse) -> Table:
    return _fields_table(
        "Booking Assistant",
        [
            ("Sentiment", result.sentiment_analysis),
            ("Booking Response", result.booking_response),
            ("Reminder", result.reminder_message),
            ("Rescheduling", result.rescheduling_option),
            ("Upsell", result.upsell_suggestion),
        ],
        style="dark_cyan",
    )


def build_event_table(result: EventResponse) -> Table:
    return _fields_table(
        "Event Promotion",
        [
            ("Social Media Caption", result.social_media_caption),
            ("Banner Text", result.banner_text),
            ("Hashtags", " ".join(result.hashtags)),
            ("Engagement Questions", _bullets(result.engagement_questions)),
            ("Video Script Concept", result.video_script_concept),
            ("Image Suggestion", result.image_suggestion),
        ],
        style="slate_blue1",
    )


def build_error_panel(error: GenerationFailedError) -> Panel:
    """Aviso bloqueante: el usuario decide si reintenta."""

    body = Text("Error generating response.\n", style="bold")
    body.append(f"Reason: {error.kind.value}\n", style="dim")
    retry_after = error.cause.retry_after
    if retry_after:
        body.append(f"Retry after ~{retry_after:.0f}s.\n", style="dim")
    body.append("Run the command again to retry.")
    return Panel(body, title=Text("Generation failed", style="bold red"), border_style="red")


def describe_image(image: ImageAsset | None) -> Text:
    if image is None:
        return Text("No image available.", style="dim")
    size_kb = len(image.as_bytes()) / 1024
    return Text(f"Image generated ({image.mime_type}, {size_kb:.1f} KB).", style="green")
