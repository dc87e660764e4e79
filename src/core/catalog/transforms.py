"""Transforms y expanders por recurso.

Los transforms reciben un item de la API (ya copiado) y lo devuelven con los
nombres de atributo del provider. Los expanders pueden hacer lecturas extra para
datos que el endpoint de listado no incluye (items de listas, cuerpos de reglas).

Una lista de mappings se renderiza como bloques anidados repetidos: envolver un
mapping en una lista de un elemento es la forma de pedir sintaxis de bloque.
"""

from __future__ import annotations

from typing import Any

from core.domain.scope import ScopeTarget
from core.interfaces.resource_source import ResourceSource


def header_blocks(headers: Any) -> list[dict[str, Any]] | None:
    """`{"Host": ["a"]}` -> `[{"header": "Host", "values": ["a"]}]`."""

    if not isinstance(headers, dict) or not headers:
        return None
    return [{"header": name, "values": values} for name, values in headers.items()]


def dns_record(item: dict[str, Any]) -> dict[str, Any]:
    content = item.pop("content", None)
    # CAA, SRV, LOC y compañía traen su valor en `data`.
    if not item.get("data") and content is not None:
        item["value"] = content
    if not item.get("tags"):
        item.pop("tags", None)
    return item


def page_rule(item: dict[str, Any]) -> dict[str, Any]:
    out = {k: v for k, v in item.items() if k not in ("targets", "actions")}

    targets = item.get("targets") or []
    if targets:
        out["target"] = (targets[0].get("constraint") or {}).get("value")

    actions: dict[str, Any] = {}
    for action in item.get("actions") or []:
        value = action.get("value")
        # Los switches on/off como always_use_https vuelven sin valor.
        if value is None:
            value = True
        elif isinstance(value, dict):
            value = [value]
        actions[action["id"]] = value
    if actions:
        out["actions"] = [actions]
    return out


def firewall_rule(item: dict[str, Any]) -> dict[str, Any]:
    filter_ = item.pop("filter", None) or {}
    item["filter_id"] = filter_.get("id")
    return item


def healthcheck(item: dict[str, Any]) -> dict[str, Any]:
    item["header"] = header_blocks(item.get("header"))
    return item


def load_balancer(item: dict[str, Any]) -> dict[str, Any]:
    for key, label in (("region_pools", "region"), ("pop_pools", "pop"), ("country_pools", "country")):
        pools = item.get(key)
        if isinstance(pools, dict) and pools:
            item[key] = [{label: name, "pool_ids": ids} for name, ids in pools.items()]
        else:
            item.pop(key, None)
    return item


def custom_hostname(item: dict[str, Any]) -> dict[str, Any]:
    ssl = item.get("ssl")
    if isinstance(ssl, dict):
        kept = {
            k: ssl[k]
            for k in ("method", "type", "wildcard", "certificate_authority", "settings")
            if ssl.get(k) is not None
        }
        if isinstance(kept.get("settings"), dict):
            kept["settings"] = [kept["settings"]]
        item["ssl"] = kept or None
    return item


def managed_headers(item: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("managed_request_headers", "managed_response_headers"):
        enabled = [
            {"id": header["id"], "enabled": True}
            for header in item.get(key) or []
            if header.get("enabled")
        ]
        if enabled:
            out[key] = enabled
    return out


def tiered_cache(item: dict[str, Any]) -> dict[str, Any]:
    return {"cache_type": "smart" if item.get("value") == "on" else "off"}


def argo(item: dict[str, Any]) -> dict[str, Any]:
    return {
        "smart_routing": item.get("value"),
        "tiered_caching": item.get("tiered_caching"),
    }


def account_member(item: dict[str, Any]) -> dict[str, Any]:
    user = item.get("user") or {}
    return {
        "email_address": user.get("email"),
        "role_ids": [role["id"] for role in item.get("roles") or []],
        "status": item.get("status"),
    }


def byo_ip_prefix(item: dict[str, Any]) -> dict[str, Any]:
    item["prefix_id"] = item.get("id")
    advertised = item.get("advertised")
    if advertised is not None:
        item["advertisement"] = "on" if advertised else "off"
    return item


def custom_pages(item: dict[str, Any]) -> dict[str, Any]:
    item["type"] = item.get("id")
    return item


def custom_page_is_default(item: dict[str, Any]) -> bool:
    return item.get("state") == "default" or not item.get("url")


def ruleset_is_managed(item: dict[str, Any]) -> bool:
    return item.get("kind") == "managed"


def tunnel_is_deleted(item: dict[str, Any]) -> bool:
    return bool(item.get("deleted_at"))


def certificate_pack_is_universal(item: dict[str, Any]) -> bool:
    return item.get("type") == "universal"


def expand_argo(source: ResourceSource, item: dict[str, Any], target: ScopeTarget) -> dict[str, Any]:
    tiered = source.get(f"{target.scope.path_prefix(target.identifier)}/argo/tiered_caching")
    item["tiered_caching"] = (tiered or {}).get("value")
    return item


def expand_list_items(source: ResourceSource, item: dict[str, Any], target: ScopeTarget) -> dict[str, Any]:
    """Agrega bloques `item`; cada valor va en un bloque con el nombre del tipo de lista."""

    kind = item.get("kind")
    path = f"{target.scope.path_prefix(target.identifier)}/rules/lists/{item['id']}/items"

    blocks: list[dict[str, Any]] = []
    for entry in source.list(path):
        raw = entry.get(kind)
        if raw is None:
            continue
        value = [raw] if isinstance(raw, dict) else raw
        blocks.append({"comment": entry.get("comment") or None, "value": [{kind: value}]})

    if blocks:
        item["item"] = blocks
    return item


def expand_teams_list_items(source: ResourceSource, item: dict[str, Any], target: ScopeTarget) -> dict[str, Any]:
    path = f"{target.scope.path_prefix(target.identifier)}/gateway/lists/{item['id']}/items"
    values = [entry.get("value") for entry in source.list(path)]
    item["items"] = [v for v in values if v is not None]
    return item


def fan_out_waiting_room_events(
    source: ResourceSource, room: dict[str, Any], target: ScopeTarget
) -> list[dict[str, Any]]:
    path = f"{target.scope.path_prefix(target.identifier)}/waiting_rooms/{room['id']}/events"
    events = []
    for event in source.list(path):
        if isinstance(event, dict):
            events.append({**event, "waiting_room_id": room["id"]})
    return events


def fan_out_waiting_room_rules(
    source: ResourceSource, room: dict[str, Any], target: ScopeTarget
) -> list[dict[str, Any]]:
    """Un recurso de reglas por waiting room que tenga alguna; `enabled` pasa a `status`."""

    path = f"{target.scope.path_prefix(target.identifier)}/waiting_rooms/{room['id']}/rules"
    rules = source.get(path) or []
    blocks = [
        {
            "action": rule.get("action"),
            "description": rule.get("description") or None,
            "expression": rule.get("expression"),
            "status": "enabled" if rule.get("enabled", True) else "disabled",
        }
        for rule in rules
        if isinstance(rule, dict)
    ]
    if not blocks:
        return []
    return [{"id": room["id"], "waiting_room_id": room["id"], "rules": blocks}]
