"""Interacciones HTTP grabadas ("cassettes").

Un cassette es un JSON con los pares request/response de un test. Los
transportes se enchufan en `httpx.Client(transport=...)`, que es el cliente que
usa el SDK de Cloudflare:

- `ReplayTransport` responde desde el cassette, nunca toca la red.
- `RecordingTransport` reenvía a un transporte real y guarda lo que vio.

Credenciales y headers volátiles se eliminan antes de escribir nada.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import httpx
from pydantic import BaseModel, Field

from core.errors import CassetteError

logger = logging.getLogger(__name__)

SENSITIVE_REQUEST_HEADERS = ("x-auth-email", "x-auth-key", "authorization", "user-agent")
# Telemetría que el SDK añade a cada request (OS, runtime, reintentos).
SDK_HEADER_PREFIX = "x-stainless-"
VOLATILE_RESPONSE_HEADERS = (
    "cf-cache-status",
    "cf-ray",
    "date",
    "server",
    "set-cookie",
    "x-envoy-upstream-service-time",
)
# El body guardado es texto decodificado; estos describen los bytes del wire.
_ENCODING_HEADERS = ("content-encoding", "content-length", "transfer-encoding")

REPLACEMENT_DOMAIN = "example.com"


class RecordedRequest(BaseModel):
    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)


class RecordedResponse(BaseModel):
    status_code: int = 200
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None

    def content(self) -> bytes:
        if self.body is None:
            return b""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return json.dumps(self.body).encode("utf-8")


class Interaction(BaseModel):
    request: RecordedRequest
    response: RecordedResponse


class Cassette(BaseModel):
    interactions: list[Interaction] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "Cassette":
        if not path.exists():
            raise CassetteError(f"cassette not found: {path}")
        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = self.model_dump(mode="json")
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        return path


def normalize_url(url: str | httpx.URL) -> str:
    """URL con los query params ordenados: el orden nunca importa."""

    parsed = httpx.URL(str(url))
    params = sorted(parsed.params.multi_items())
    return str(parsed.copy_with(params=params))


def _without(headers: dict[str, str], names: tuple[str, ...]) -> dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() not in names}


def _replace_domain(body: Any, domain: str) -> Any:
    if isinstance(body, str):
        return body.replace(domain, REPLACEMENT_DOMAIN)
    text = json.dumps(body).replace(domain, REPLACEMENT_DOMAIN)
    return json.loads(text)


def filter_interaction(interaction: Interaction, *, domain: str | None = None) -> Interaction:
    """Copia apta para commitear: sin credenciales ni headers volátiles.

    `domain` toma `CLOUDFLARE_DOMAIN` por defecto; si existe, se reemplaza por
    `example.com` en el body de la respuesta.
    """

    domain = domain if domain is not None else os.environ.get("CLOUDFLARE_DOMAIN")

    headers = _without(interaction.request.headers, SENSITIVE_REQUEST_HEADERS)
    headers = {k: v for k, v in headers.items() if not k.lower().startswith(SDK_HEADER_PREFIX)}
    request = interaction.request.model_copy(update={"headers": headers})
    body = interaction.response.body
    if domain and body is not None:
        body = _replace_domain(body, domain)
    response = interaction.response.model_copy(
        update={
            "headers": _without(interaction.response.headers, VOLATILE_RESPONSE_HEADERS),
            "body": body,
        }
    )
    return Interaction(request=request, response=response)


class ReplayTransport(httpx.BaseTransport):
    """Sirve requests desde un cassette; cada interacción se usa una sola vez."""

    def __init__(self, cassette: Cassette) -> None:
        self.cassette = cassette
        self._used: set[int] = set()

    @classmethod
    def from_path(cls, path: Path) -> "ReplayTransport":
        return cls(Cassette.load(path))

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        wanted = normalize_url(request.url)
        for index, interaction in enumerate(self.cassette.interactions):
            if index in self._used:
                continue
            recorded = interaction.request
            if recorded.method.upper() != request.method.upper():
                continue
            if normalize_url(recorded.url) != wanted:
                continue
            self._used.add(index)
            logger.debug("replaying %s %s", request.method, wanted)
            return httpx.Response(
                interaction.response.status_code,
                headers=_without(interaction.response.headers, _ENCODING_HEADERS),
                content=interaction.response.content(),
                request=request,
            )
        raise CassetteError(f"no recorded interaction for {request.method} {wanted}")


class RecordingTransport(httpx.BaseTransport):
    """Reenvía a un transporte real y escribe el cassette en `close()`."""

    def __init__(self, path: Path, inner: httpx.BaseTransport | None = None) -> None:
        self.path = path
        self._inner = inner or httpx.HTTPTransport()
        self.cassette = Cassette()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        response = self._inner.handle_request(request)
        content = response.read()

        body: Any
        try:
            body = json.loads(content) if content else None
        except ValueError:
            body = content.decode("utf-8", errors="replace")

        interaction = Interaction(
            request=RecordedRequest(
                method=request.method,
                url=str(request.url),
                headers=dict(request.headers.items()),
            ),
            response=RecordedResponse(
                status_code=response.status_code,
                headers=_without(dict(response.headers.items()), _ENCODING_HEADERS),
                body=body,
            ),
        )
        self.cassette.interactions.append(filter_interaction(interaction))

        return httpx.Response(
            response.status_code,
            headers=_without(dict(response.headers.items()), _ENCODING_HEADERS),
            content=content,
            request=request,
        )

    def close(self) -> None:
        self.cassette.save(self.path)
        logger.debug("wrote %d interactions to %s", len(self.cassette.interactions), self.path)
        self._inner.close()
