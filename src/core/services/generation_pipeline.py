"""Resource generation orchestration.

The CLI delegates everything between "which resource types, which scope" and
"a list of `GeneratedResource`" to these helpers, which keeps printing out of
the core logic and makes the flow reusable from tests or other entry points.
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from core.catalog import get_definition
from core.domain.models import GeneratedResource, ResourceDefinition
from core.domain.scope import ScopeTarget
from core.errors import ConfigurationError
from core.interfaces.resource_source import ResourceSource

logger = logging.getLogger(__name__)

RESOURCE_NAME_PREFIX = "terraform_managed_resource_"

# Server-managed keys that never map to configurable attributes.
_COMPUTED_KEYS: tuple[str, ...] = (
    "id",
    "created_on",
    "modified_on",
    "created_at",
    "updated_at",
    "meta",
)


@dataclass
class GenerationRequest:
    """Parameters that control one generation run."""

    resource_types: Sequence[str]
    target: ScopeTarget


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    resources: list[GeneratedResource] = field(default_factory=list)
    unsupported: list[str] = field(default_factory=list)


def parse_resource_types(value: str) -> list[str]:
    """Split a comma separated `--resource-type` value, keeping first occurrences."""

    seen: set[str] = set()
    out: list[str] = []
    for part in value.split(","):
        name = part.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        out.append(name)
    return out


def resource_name(identifier: str) -> str:
    """Terraform-safe resource name for an API identifier."""

    cleaned = re.sub(r"[^A-Za-z0-9_-]", "_", identifier)
    return f"{RESOURCE_NAME_PREFIX}{cleaned}"


def ensure_scope_supported(definition: ResourceDefinition, target: ScopeTarget) -> None:
    if definition.supports(target.scope):
        return
    flags = " or ".join(f"--{scope.value}" for scope in definition.scopes)
    raise ConfigurationError(f'"{definition.resource_type}" requires {flags}')


def fetch_items(
    *,
    definition: ResourceDefinition,
    target: ScopeTarget,
    source: ResourceSource,
) -> list[dict[str, Any]]:
    """Read every API item for `definition` under `target`.

    Singletons yield one item. Skipped items never trigger detail or expand
    reads. With `fan_out`, each parent is replaced by the children it yields.
    """

    path = definition.endpoint_for(target)
    params = definition.params_for(target) or None

    raw: Any
    if definition.singleton:
        raw = source.get(path, params)
        raw = [raw] if isinstance(raw, dict) else []
    elif definition.paginate:
        raw = source.list(path, params)
    else:
        raw = source.get(path, params)
        if not isinstance(raw, list):
            raw = []

    items: list[dict[str, Any]] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        item = copy.deepcopy(entry)
        if definition.skip is not None and definition.skip(item):
            logger.debug("skipping %s %s", definition.resource_type, item.get(definition.id_field))
            continue
        if definition.detail_endpoint is not None:
            detail_path = definition.detail_endpoint_for(target, str(item.get(definition.id_field)))
            detail = source.get(detail_path)
            if isinstance(detail, dict):
                item = {**item, **detail}
        if definition.expand is not None:
            item = definition.expand(source, item, target)
        if definition.fan_out is not None:
            items.extend(definition.fan_out(source, item, target))
        else:
            items.append(item)

    logger.debug("fetched %d %s resources from %s", len(items), definition.resource_type, path)
    return items


def _strip_keys(value: Any, keys: tuple[str, ...]) -> Any:
    if isinstance(value, dict):
        return {k: v for k, v in value.items() if k not in keys}
    if isinstance(value, list):
        return [_strip_keys(v, keys) if isinstance(v, dict) else v for v in value]
    return value


def build_resource(
    *,
    definition: ResourceDefinition,
    item: dict[str, Any],
    target: ScopeTarget,
) -> GeneratedResource | None:
    """Map one API item onto provider attributes.

    Attributes come out sorted by name with absent values dropped. Returns
    `None` for items without an identifier.
    """

    if definition.singleton:
        identifier = target.identifier
    else:
        identifier = str(item.get(definition.id_field) or "")
    if not identifier:
        logger.warning("%s item without %r, skipping", definition.resource_type, definition.id_field)
        return None

    attributes = copy.deepcopy(item)

    for key in definition.flatten:
        nested = attributes.pop(key, None)
        if isinstance(nested, dict):
            for nested_key, nested_value in nested.items():
                attributes.setdefault(nested_key, nested_value)

    if definition.transform is not None:
        attributes = definition.transform(attributes)

    for old, new in definition.renames.items():
        if old in attributes:
            attributes[new] = attributes.pop(old)

    for key in (*_COMPUTED_KEYS, *definition.exclude):
        attributes.pop(key, None)

    if definition.fields is not None:
        attributes = {k: attributes[k] for k in definition.fields if k in attributes}

    for key, nested_keys in definition.nested_exclude.items():
        if key in attributes:
            attributes[key] = _strip_keys(attributes[key], nested_keys)

    for key in definition.blocks:
        value = attributes.get(key)
        if isinstance(value, dict):
            attributes[key] = [value] if value else None

    if definition.include_scope_attribute:
        attributes[target.scope.id_attribute] = target.identifier

    ordered = {k: attributes[k] for k in sorted(attributes) if attributes[k] is not None}

    return GeneratedResource(
        resource_type=definition.resource_type,
        name=resource_name(identifier),
        attributes=ordered,
        import_id=definition.import_id_for(target, identifier, item),
    )


def run_generation(*, request: GenerationRequest, source: ResourceSource) -> PipelineResult:
    result = PipelineResult()

    for resource_type in request.resource_types:
        definition = get_definition(resource_type)
        if definition is None:
            result.unsupported.append(resource_type)
            continue

        ensure_scope_supported(definition, request.target)
        for item in fetch_items(definition=definition, target=request.target, source=source):
            resource = build_resource(definition=definition, item=item, target=request.target)
            if resource is not None:
                result.resources.append(resource)

    return result
