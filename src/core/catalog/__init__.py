"""Catálogo de recursos: tipo de recurso de Terraform -> mapeo sobre la API.

Sólo data estática; el pipeline de generación es quien la interpreta.
"""

from __future__ import annotations

from core.catalog.account import ACCOUNT_DEFINITIONS, SHARED_DEFINITIONS
from core.catalog.zone import ZONE_DEFINITIONS
from core.domain.models import ResourceDefinition

_REGISTRY: dict[str, ResourceDefinition] = {
    definition.resource_type: definition
    for definition in (*ZONE_DEFINITIONS, *ACCOUNT_DEFINITIONS, *SHARED_DEFINITIONS)
}


def get_definition(resource_type: str) -> ResourceDefinition | None:
    return _REGISTRY.get(resource_type)


def is_supported(resource_type: str) -> bool:
    return resource_type in _REGISTRY


def supported_resource_types() -> list[str]:
    return sorted(_REGISTRY)


__all__ = [
    "get_definition",
    "is_supported",
    "supported_resource_types",
]
