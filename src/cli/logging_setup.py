"""Configuración de logging para la CLI (RichHandler)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    """Instala un único RichHandler en el root logger."""

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    handler = RichHandler(console=console or Console(stderr=True), show_path=False, rich_tracebacks=True)
    logging.basicConfig(level=numeric, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)
    # El SDK y httpx son muy verbosos en DEBUG.
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(max(numeric, logging.INFO))
