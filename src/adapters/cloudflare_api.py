"""Adaptador sobre el SDK oficial de Cloudflare (`cloudflare`).

Por qué un adaptador:
- El pipeline sólo necesita `get`/`list` sobre rutas arbitrarias; el SDK da
  esas llamadas genéricas (`Cloudflare.get`) además de los recursos tipados.
- Los errores del SDK (`APIStatusError`, `APIConnectionError`) se traducen a
  `CloudflareAPIError` para que la CLI tenga un único punto de salida.

Paginación: la API mezcla dos estilos según el endpoint, así que `list` lee el
envelope crudo y sigue `result_info.cursors.after` o `result_info.total_pages`.

Cumple `core.interfaces.resource_source.ResourceSource`.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator

import cloudflare
import httpx
from pydantic import ValidationError

from adapters.http_client import build_client, credentials
from core.config import AppSettings
from core.domain.models import ApiEnvelope
from core.errors import CFTerraformingError, CloudflareAPIError

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100


def _envelope(payload: Any) -> ApiEnvelope | None:
    if not isinstance(payload, dict):
        return None
    try:
        return ApiEnvelope.model_validate(payload)
    except ValidationError:
        return None


@contextlib.contextmanager
def _api_errors(path: str) -> Iterator[None]:
    """Traduce las excepciones del SDK a `CloudflareAPIError`."""

    try:
        yield
    except cloudflare.APIStatusError as exc:
        envelope = _envelope(exc.body)
        errors = [e.model_dump() for e in envelope.errors] if envelope else []
        raise CloudflareAPIError(f"GET {path} failed", status_code=exc.status_code, errors=errors) from exc
    except cloudflare.APIConnectionError as exc:
        cause = exc.__cause__
        # Un CassetteError llega envuelto por el SDK; se propaga tal cual.
        if isinstance(cause, CFTerraformingError):
            raise cause
        raise CloudflareAPIError(f"request to {path} failed: {cause or exc}") from exc


class CloudflareClient:
    def __init__(self, sdk: cloudflare.Cloudflare, *, per_page: int = DEFAULT_PER_PAGE) -> None:
        self._sdk = sdk
        self.per_page = per_page

    def __enter__(self) -> "CloudflareClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._sdk.close()

    def _request(self, path: str, params: dict[str, Any] | None = None) -> ApiEnvelope:
        path = path.lstrip("/")
        logger.debug("GET %s params=%s", path, params)
        options: dict[str, Any] = {"params": params} if params else {}

        with _api_errors(path):
            try:
                payload = self._sdk.get(path, cast_to=object, options=options)
            except ValueError as exc:
                raise CloudflareAPIError(f"GET {path} returned an unexpected body") from exc

        envelope = _envelope(payload)
        if envelope is None:
            raise CloudflareAPIError(f"GET {path} returned an unexpected body")
        if not envelope.success:
            raise CloudflareAPIError(
                f"GET {path} was not successful",
                errors=[e.model_dump() for e in envelope.errors],
            )
        return envelope

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Devuelve el `result` de una sola petición."""

        return self._request(path, params=params).result

    def list(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        per_page: int | None = None,
    ) -> list[Any]:
        """Devuelve todos los items de una colección paginada, en orden de la API."""

        base: dict[str, Any] = dict(params or {})
        base.setdefault("per_page", per_page or self.per_page)

        items: list[Any] = []
        query = base
        page = 1
        seen_cursors: set[str] = set()
        while True:
            envelope = self._request(path, params=query)
            result = envelope.result
            if result is None:
                break
            if not isinstance(result, list):
                items.append(result)
                break
            items.extend(result)

            info = envelope.result_info
            if info is None or not result:
                break

            after = info.cursors.after if info.cursors else None
            if after:
                if after in seen_cursors:
                    break
                seen_cursors.add(after)
                query = {**base, "cursor": after}
                continue

            if info.total_pages is not None and page < info.total_pages:
                page += 1
                query = {**base, "page": page}
                continue
            break

        logger.debug("listed %d items from %s", len(items), path)
        return items

    def verify_token(self) -> dict[str, Any]:
        """Verifica el API token configurado; devuelve `{id, status, ...}`."""

        with _api_errors("user/tokens/verify"):
            result = self._sdk.user.tokens.verify()
        return result.model_dump(exclude_none=True) if result is not None else {}

    def current_user(self) -> dict[str, Any]:
        """Usuario detrás de las credenciales email + global key."""

        result = self.get("user")
        return result if isinstance(result, dict) else {}


def open_client(settings: AppSettings, *, transport: httpx.BaseTransport | None = None) -> CloudflareClient:
    """Cliente autenticado para `settings`; sin credenciales lanza `ConfigurationError`."""

    sdk = cloudflare.Cloudflare(
        **credentials(settings),
        base_url=settings.base_url,
        timeout=settings.http_timeout_seconds,
        max_retries=0,
        default_headers={"User-Agent": settings.user_agent},
        http_client=build_client(settings, transport=transport),
    )
    return CloudflareClient(sdk, per_page=settings.per_page)
