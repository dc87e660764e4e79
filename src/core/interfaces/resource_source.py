"""Contrato para obtener recursos.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- El pipeline corre igual contra el cliente real, una cassette reproducida o un
  fake en memoria en los tests.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResourceSource(Protocol):
    """Superficie mínima, sólo lectura, que necesita el pipeline de generación.

    Los paths son relativos a la raíz versionada de la API (p.ej. `zones/<id>/dns_records`).
    """

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Pide un solo envelope y devuelve su `result`."""

        ...

    def list(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """Recorre todas las páginas de una colección y devuelve los resultados concatenados."""

        ...
