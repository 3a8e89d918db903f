"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import probe_url
from core.config import AppSettings, GEMINI_OPENAI_BASE_URL, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PRESETS: dict[str, dict[str, str]] = {
    "gemini": {
        "BIZBOOST_AI_BASE_URL": GEMINI_OPENAI_BASE_URL,
        "BIZBOOST_TEXT_MODEL": "gemini-2.5-flash",
        "BIZBOOST_IMAGE_MODEL": "gemini-2.5-flash-image",
    },
    "openai": {
        "BIZBOOST_AI_BASE_URL": "https://api.openai.com/v1",
        "BIZBOOST_TEXT_MODEL": "gpt-4o-mini",
        "BIZBOOST_IMAGE_MODEL": "gpt-image-1",
    },
    "openrouter": {
        "BIZBOOST_AI_BASE_URL": "https://openrouter.ai/api/v1",
        "BIZBOOST_TEXT_MODEL": "google/gemini-2.5-flash",
        "BIZBOOST_IMAGE_MODEL": "",
    },
    "ollama": {
        "BIZBOOST_AI_BASE_URL": "http://localhost:11434/v1",
        "BIZBOOST_TEXT_MODEL": "llama3.1",
        "BIZBOOST_IMAGE_MODEL": "",
    },
}


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="BizBoost Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.ai_api_key:
        table.add_row("AI key", "OK", "Remote AI enabled")
    else:
        table.add_row("AI key", "MISSING", "Set BIZBOOST_AI_API_KEY or run `bizboost doctor setup-ai`")
    table.add_row("AI base_url", "OK", settings.ai_base_url)
    table.add_row("Text model", "OK", settings.text_model)
    if settings.image_model.strip():
        table.add_row("Image model", "OK", settings.image_model)
    else:
        table.add_row("Image model", "OFF", "Image generation disabled for this provider")
    if settings.strict_decode:
        table.add_row("Strict decode", "ON", "Malformed output -> error")
    else:
        table.add_row("Strict decode", "OFF", "Malformed output -> empty fields")

    ok_http, detail_http = asyncio.run(probe_url(settings.ai_base_url, settings))
    table.add_row("Provider connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup-ai")
def setup_ai() -> None:
    """Interactive AI setup (stores config in the user config .env)."""

    provider = typer.prompt(
        "AI provider",
        default="gemini",
        show_default=True,
    ).strip().lower()

    values = PRESETS.get(provider, {}).copy()
    if not values:
        _console.print("[yellow]Unknown provider preset. You can still enter custom values.[/yellow]")

    base_url = typer.prompt("AI base URL", default=values.get("BIZBOOST_AI_BASE_URL", ""), show_default=True).strip()
    text_model = typer.prompt("Text model", default=values.get("BIZBOOST_TEXT_MODEL", ""), show_default=True).strip()
    image_model = typer.prompt(
        "Image model (blank: no images)", default=values.get("BIZBOOST_IMAGE_MODEL", text_model), show_default=True
    ).strip()
    api_key = typer.prompt("AI API key", hide_input=True, confirmation_prompt=False, default="").strip()

    if not base_url or not text_model:
        raise typer.BadParameter("base_url and text model are required")

    env_path = write_user_env_vars(
        {
            "BIZBOOST_AI_BASE_URL": base_url,
            "BIZBOOST_TEXT_MODEL": text_model,
            "BIZBOOST_IMAGE_MODEL": image_model,
            "BIZBOOST_AI_API_KEY": api_key or None,
        }
    )

    _console.print(f"[green]Saved AI config to:[/green] {env_path}")
