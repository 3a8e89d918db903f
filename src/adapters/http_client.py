"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para los chequeos HTTP auxiliares (doctor).
- Facilita testeo: se puede sustituir por un stub/mocked client.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(settings: AppSettings | None = None) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, */*;q=0.8",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


async def probe_url(url: str, settings: AppSettings | None = None) -> tuple[bool, str]:
    """Comprueba conectividad: cualquier respuesta HTTP cuenta como alcanzable."""

    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"
    return True, f"HTTP {response.status_code}"
