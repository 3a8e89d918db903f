"""CLI de BizBoost (Typer).

Cada comando construye un request tipado, ejecuta exactamente un round trip
de generación y renderiza la respuesta. Un fallo de texto es un aviso
bloqueante (exit 1); un fallo de imagen solo se informa.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console

from adapters.ai_client import IMAGES_UNSUPPORTED_MESSAGE, OpenAICompatibleGenerator
from adapters.calendar_export import export_appointment_ics, parse_start_time
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import (
    build_appointment_table,
    build_error_panel,
    build_event_table,
    build_menu_table,
    build_seasonal_panel,
    describe_image,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import DecodeError, GenerationFailedError, MissingCredentialsError
from core.domain.language import Language
from core.domain.models import (
    AppointmentRequest,
    EventRequest,
    ImageAsset,
    MenuRequest,
    SeasonalDishSuggestion,
)
from core.services.generation_pipeline import MarketingAssistant

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="BizBoost AI: marketing copy for small businesses.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def _main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings
    if banner and ctx.invoked_subcommand != "doctor":
        print_banner(_console)


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


def _build_request(model: type[T], **values: object) -> T:
    try:
        return model.model_validate(values)  # type: ignore[attr-defined]
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise typer.BadParameter(f"missing or invalid fields: {fields}") from exc


def _run_session(settings: AppSettings, work: Callable[[MarketingAssistant], Awaitable[T]]) -> T:
    """Ejecuta `work` con un generador de vida acotada al comando."""

    async def _go() -> T:
        generator = OpenAICompatibleGenerator(settings)
        try:
            assistant = MarketingAssistant(generator, strict=settings.strict_decode)
            return await work(assistant)
        finally:
            await generator.aclose()

    try:
        return asyncio.run(_go())
    except MissingCredentialsError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc
    except GenerationFailedError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc
    except DecodeError as exc:
        _console.print(f"[red]The AI response did not match the expected format:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _print_json(result: BaseModel) -> None:
    payload = result.to_wire()  # type: ignore[attr-defined]
    _console.print_json(json.dumps(payload, ensure_ascii=False))


def _report_image(image: ImageAsset | None, output: Path | None) -> None:
    _console.print(describe_image(image))
    if image is None or output is None:
        return
    if not output.suffix:
        output = output.with_suffix(f".{image.extension}")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(image.as_bytes())
    _console.print(f"[green]Saved image to:[/green] {output}")


def _language_value(language: Language | None, settings: AppSettings) -> str:
    return (language or settings.default_language).value


def _images_enabled(settings: AppSettings) -> bool:
    if settings.image_model.strip():
        return True
    _console.print(f"[yellow]{IMAGES_UNSUPPORTED_MESSAGE}[/yellow]")
    return False


def _seasonal_menu_request(suggestion: SeasonalDishSuggestion, language: str) -> MenuRequest:
    try:
        return MenuRequest.from_seasonal(suggestion, language=language)
    except ValidationError as exc:
        raise DecodeError("seasonal suggestion came back without ingredients") from exc


@app.command()
def menu(
    ctx: typer.Context,
    ingredients: str | None = typer.Option(None, "--ingredients", "-i", help="Main ingredients, comma separated."),
    dish_type: str = typer.Option("Main Course", "--dish-type", "-t", help="Appetizer, Main Course, Dessert..."),
    cuisine: str = typer.Option("", "--cuisine", help="Cuisine or style (optional)."),
    notes: str = typer.Option("", "--notes", help="Anything the copy should mention (optional)."),
    seasonal_special: bool = typer.Option(
        False, "--seasonal", help="Start from a trending seasonal dish instead of --ingredients."
    ),
    language: Language | None = typer.Option(None, "--language", "-l", case_sensitive=False),
    image: bool = typer.Option(False, "--image", help="Also generate a visual from the image suggestion."),
    image_out: Path | None = typer.Option(None, "--image-out", help="Where to save the generated visual."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response fields as JSON."),
) -> None:
    """Create menu descriptions, captions, nutrition estimates and offers for a dish."""

    settings = _settings(ctx)
    language_value = _language_value(language, settings)
    request: MenuRequest | None = None
    if seasonal_special:
        if ingredients:
            raise typer.BadParameter("use either --ingredients or --seasonal, not both")
    else:
        request = _build_request(
            MenuRequest,
            ingredients=ingredients,
            dishType=dish_type,
            cuisine=cuisine,
            notes=notes,
            language=language_value,
        )
    want_image = (image or image_out is not None) and _images_enabled(settings)

    async def work(assistant: MarketingAssistant):
        suggestion = None
        menu_request = request
        if menu_request is None:
            suggestion = await assistant.generate_seasonal_suggestion()
            menu_request = _seasonal_menu_request(suggestion, language_value)
        result = await assistant.generate_menu_content(menu_request)
        visual = await assistant.generate_visual(result.image_suggestion) if want_image else None
        return suggestion, result, visual

    suggestion, result, visual = _run_session(settings, work)
    if as_json:
        _print_json(result)
    else:
        if suggestion is not None:
            _console.print(build_seasonal_panel(suggestion))
        _console.print(build_menu_table(result))
    if want_image:
        _report_image(visual, image_out)



@app.command()
def seasonal(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print the raw response fields as JSON."),
) -> None:
    """Suggest a trending seasonal dish to fill the menu form."""

    settings = _settings(ctx)
    result = _run_session(settings, lambda assistant: assistant.generate_seasonal_suggestion())
    if as_json:
        _print_json(result)
    else:
        _console.print(build_seasonal_panel(result))


@app.command()
def appointment(
    ctx: typer.Context,
    service: str = typer.Option(..., "--service", "-s", help="Service requested (e.g. Haircut)."),
    time: str = typer.Option(..., "--time", help="Date and time, ISO 8601 (e.g. 2025-03-01T14:30)."),
    business_type: str = typer.Option("Salon", "--business-type", "-b", help="Dental Clinic, Hair Salon, Tutor..."),
    language: Language | None = typer.Option(None, "--language", "-l", case_sensitive=False),
    message: str = typer.Option("", "--message", "-m", help="Customer message, used for sentiment analysis."),
    ics: Path | None = typer.Option(None, "--ics", help="Also write a one-hour calendar file (.ics)."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response fields as JSON."),
) -> None:
    """Draft booking confirmation, reminder, rescheduling and upsell messages."""

    settings = _settings(ctx)
    request = _build_request(
        AppointmentRequest,
        businessType=business_type,
        service=service,
        time=time,
        language=_language_value(language, settings),
        customerMessage=message,
    )

    result = _run_session(settings, lambda assistant: assistant.generate_appointment_content(request))
    if as_json:
        _print_json(result)
    else:
        _console.print(build_appointment_table(result))

    if ics is not None:
        try:
            start = parse_start_time(request.time)
        except ValueError:
            _console.print("[yellow]Time is not ISO 8601; calendar file skipped.[/yellow]")
            return
        path = export_appointment_ics(
            service=request.service,
            business_type=request.business_type,
            start=start,
            output_path=ics,
        )
        _console.print(f"[green]Saved calendar file to:[/green] {path}")


@app.command()
def event(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Event name."),
    event_type: str = typer.Option(..., "--type", "-t", help="Workshop, Concert, Sale..."),
    date_time: str = typer.Option(..., "--date-time", "-d", help="When it happens."),
    location: str = typer.Option(..., "--location", help="Where it happens."),
    highlights: str = typer.Option("", "--highlights", help="Key attractions (optional)."),
    audience: str = typer.Option("", "--audience", help="Target audience (optional)."),
    image: bool = typer.Option(False, "--image", help="Also generate a visual from the image suggestion."),
    image_out: Path | None = typer.Option(None, "--image-out", help="Where to save the generated visual."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response fields as JSON."),
) -> None:
    """Create captions, banner text, hashtags and engagement hooks for an event."""

    settings = _settings(ctx)
    request = _build_request(
        EventRequest,
        eventName=name,
        eventType=event_type,
        dateTime=date_time,
        location=location,
        highlights=highlights,
        targetAudience=audience,
    )
    want_image = (image or image_out is not None) and _images_enabled(settings)

    async def work(assistant: MarketingAssistant):
        result = await assistant.generate_event_content(request)
        visual = await assistant.generate_visual(result.image_suggestion) if want_image else None
        return result, visual

    result, visual = _run_session(settings, work)
    if as_json:
        _print_json(result)
    else:
        _console.print(build_event_table(result))
    if want_image:
        _report_image(visual, image_out)


@app.command(name="image")
def image_command(
    ctx: typer.Context,
    description: str = typer.Argument(..., help="Short description of the visual."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Where to save the image."),
) -> None:
    """Generate a square visual from a short description."""

    settings = _settings(ctx)
    if not _images_enabled(settings):
        raise typer.Exit(code=1)
    visual = _run_session(settings, lambda assistant: assistant.generate_visual(description))
    _report_image(visual, output)


def run() -> None:
    app()
