"""Wrapper de httpx para el SDK de Cloudflare.

Por qué un wrapper:
- El SDK oficial corre sobre httpx y acepta un `http_client` propio; aquí se
  fijan timeouts y el transporte.
- Facilita testeo: se inyecta un `transport` (mock o cassette) sin tocar el SDK.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.errors import ConfigurationError


def credentials(settings: AppSettings) -> dict[str, str]:
    """Argumentos de autenticación para `cloudflare.Cloudflare`.

    Un API token con scope gana sobre email + global key.
    """

    if settings.api_token:
        return {"api_token": settings.api_token}
    if settings.email and settings.api_key:
        return {"api_email": settings.email, "api_key": settings.api_key}
    raise ConfigurationError(
        "no credentials configured: set CLOUDFLARE_API_TOKEN, or CLOUDFLARE_EMAIL and CLOUDFLARE_API_KEY"
    )


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea el `httpx.Client` que usará el SDK.

    Base URL, headers y auth los pone el SDK; aquí sólo timeouts y transporte.
    """

    settings = settings or AppSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        transport=transport,
    )
