"""Tests for the generation pipeline."""

from __future__ import annotations

from typing import Any

import pytest

from core.catalog import get_definition
from core.domain.scope import Scope, ScopeTarget
from core.errors import ConfigurationError
from core.services.generation_pipeline import (
    GenerationRequest,
    build_resource,
    fetch_items,
    parse_resource_types,
    resource_name,
    run_generation,
)

from conftest import ACCOUNT_ID, ZONE_ID

ZONE = ScopeTarget(Scope.ZONE, ZONE_ID)
ACCOUNT = ScopeTarget(Scope.ACCOUNT, ACCOUNT_ID)


class FakeSource:
    """Records every call; answers from a path -> result mapping."""

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, str, dict[str, Any] | None]] = []

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        self.calls.append(("get", path, params))
        return self.responses[path]

    def list(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        self.calls.append(("list", path, params))
        return list(self.responses[path])


def dns_record(record_id: str, name: str, content: str, **extra: Any) -> dict[str, Any]:
    return {
        "id": record_id,
        "zone_id": ZONE_ID,
        "zone_name": "example.com",
        "name": name,
        "type": "A",
        "content": content,
        "proxied": False,
        "ttl": 1,
        "meta": {"auto_added": False},
        "created_on": "2021-04-21T10:51:12Z",
        "modified_on": "2021-04-21T10:51:12Z",
        **extra,
    }


class TestHelpers:
    def test_parse_resource_types(self) -> None:
        assert parse_resource_types(" a, b,a,,c ") == ["a", "b", "c"]

    def test_resource_name_is_sanitized(self) -> None:
        assert resource_name("abc123") == "terraform_managed_resource_abc123"
        assert resource_name("a.b/c d") == "terraform_managed_resource_a_b_c_d"


class TestBuildResource:
    def test_dns_record(self) -> None:
        definition = get_definition("cloudflare_record")
        assert definition is not None
        resource = build_resource(
            definition=definition,
            item=dns_record("r1", "example.com", "192.0.2.1", comment=None, tags=[]),
            target=ZONE,
        )
        assert resource is not None
        assert resource.resource_type == "cloudflare_record"
        assert resource.name == "terraform_managed_resource_r1"
        assert resource.address == "cloudflare_record.terraform_managed_resource_r1"
        assert resource.import_id == f"{ZONE_ID}/r1"
        assert resource.attributes == {
            "name": "example.com",
            "proxied": False,
            "ttl": 1,
            "type": "A",
            "value": "192.0.2.1",
            "zone_id": ZONE_ID,
        }
        assert list(resource.attributes) == sorted(resource.attributes)

    def test_block_field_mapping_is_wrapped(self) -> None:
        definition = get_definition("cloudflare_record")
        assert definition is not None
        item = dns_record("r2", "example.com", "", type="CAA", data={"flags": 0, "tag": "issue", "value": "ca.example"})
        resource = build_resource(definition=definition, item=item, target=ZONE)
        assert resource is not None
        assert resource.attributes["data"] == [{"flags": 0, "tag": "issue", "value": "ca.example"}]
        assert "value" not in resource.attributes

    def test_item_without_identifier_is_dropped(self) -> None:
        definition = get_definition("cloudflare_filter")
        assert definition is not None
        assert build_resource(definition=definition, item={"expression": "true"}, target=ZONE) is None

    def test_account_member(self) -> None:
        definition = get_definition("cloudflare_account_member")
        assert definition is not None
        item = {
            "id": "m1",
            "user": {"email": "user@example.com"},
            "roles": [{"id": "role1"}],
            "status": "accepted",
        }
        resource = build_resource(definition=definition, item=item, target=ACCOUNT)
        assert resource is not None
        assert resource.attributes == {
            "account_id": ACCOUNT_ID,
            "email_address": "user@example.com",
            "role_ids": ["role1"],
            "status": "accepted",
        }
        assert resource.import_id == f"{ACCOUNT_ID}/m1"

    def test_healthcheck_flattens_http_config(self) -> None:
        definition = get_definition("cloudflare_healthcheck")
        assert definition is not None
        item = {
            "id": "h1",
            "name": "origin",
            "address": "origin.example.com",
            "type": "HTTPS",
            "http_config": {"method": "GET", "port": 443, "header": {"Host": ["example.com"]}},
            "tcp_config": None,
            "status": "healthy",
        }
        resource = build_resource(definition=definition, item=item, target=ZONE)
        assert resource is not None
        assert resource.attributes["method"] == "GET"
        assert resource.attributes["port"] == 443
        assert resource.attributes["header"] == [{"header": "Host", "values": ["example.com"]}]
        assert "status" not in resource.attributes
        assert "http_config" not in resource.attributes

    def test_origin_ca_certificate_has_no_scope_attribute(self) -> None:
        definition = get_definition("cloudflare_origin_ca_certificate")
        assert definition is not None
        item = {"id": "c1", "hostnames": ["example.com"], "request_type": "origin-rsa", "certificate": "PEM"}
        resource = build_resource(definition=definition, item=item, target=ZONE)
        assert resource is not None
        assert "zone_id" not in resource.attributes
        assert resource.import_id == "c1"


class TestFetchItems:
    def test_singleton(self) -> None:
        definition = get_definition("cloudflare_custom_hostname_fallback_origin")
        assert definition is not None
        path = f"zones/{ZONE_ID}/custom_hostnames/fallback_origin"
        source = FakeSource({path: {"origin": "fallback.example.com", "status": "active", "errors": []}})

        items = fetch_items(definition=definition, target=ZONE, source=source)
        assert items == [{"origin": "fallback.example.com", "status": "active", "errors": []}]
        assert source.calls == [("get", path, None)]

        resource = build_resource(definition=definition, item=items[0], target=ZONE)
        assert resource is not None
        assert resource.name == f"terraform_managed_resource_{ZONE_ID}"
        assert resource.attributes == {"origin": "fallback.example.com", "zone_id": ZONE_ID}
        assert resource.import_id == ZONE_ID

    def test_paginated_list_uses_list(self) -> None:
        definition = get_definition("cloudflare_record")
        assert definition is not None
        path = f"zones/{ZONE_ID}/dns_records"
        source = FakeSource({path: [dns_record("r1", "a.example.com", "192.0.2.1")]})
        assert len(fetch_items(definition=definition, target=ZONE, source=source)) == 1
        assert source.calls == [("list", path, None)]

    def test_static_params(self) -> None:
        definition = get_definition("cloudflare_origin_ca_certificate")
        assert definition is not None
        source = FakeSource({"certificates": []})
        assert fetch_items(definition=definition, target=ZONE, source=source) == []
        assert source.calls == [("get", "certificates", {"zone_id": ZONE_ID})]

    def test_ruleset_skips_managed_and_fetches_detail(self) -> None:
        definition = get_definition("cloudflare_ruleset")
        assert definition is not None
        source = FakeSource(
            {
                f"zones/{ZONE_ID}/rulesets": [
                    {"id": "rs1", "name": "default", "kind": "zone", "phase": "http_request_firewall_custom"},
                    {"id": "mg1", "name": "Cloudflare Managed Ruleset", "kind": "managed", "phase": "ddos_l7"},
                ],
                f"zones/{ZONE_ID}/rulesets/rs1": {
                    "id": "rs1",
                    "name": "default",
                    "kind": "zone",
                    "phase": "http_request_firewall_custom",
                    "version": "3",
                    "rules": [
                        {
                            "id": "rule1",
                            "version": "1",
                            "action": "block",
                            "expression": 'ip.src eq 192.0.2.1',
                            "enabled": True,
                            "last_updated": "2023-01-01T00:00:00Z",
                            "ref": "rule1",
                        }
                    ],
                    "last_updated": "2023-01-01T00:00:00Z",
                },
            }
        )

        result = run_generation(
            request=GenerationRequest(resource_types=["cloudflare_ruleset"], target=ZONE),
            source=source,
        )

        assert [call[1] for call in source.calls] == [f"zones/{ZONE_ID}/rulesets", f"zones/{ZONE_ID}/rulesets/rs1"]
        assert len(result.resources) == 1
        resource = result.resources[0]
        assert resource.import_id == f"zone/{ZONE_ID}/rs1"
        assert resource.attributes == {
            "kind": "zone",
            "name": "default",
            "phase": "http_request_firewall_custom",
            "rules": [{"action": "block", "expression": "ip.src eq 192.0.2.1", "enabled": True}],
            "zone_id": ZONE_ID,
        }

    def test_waiting_room_events_fan_out_per_room(self) -> None:
        rooms = f"zones/{ZONE_ID}/waiting_rooms"
        source = FakeSource(
            {
                rooms: [{"id": "wr1", "name": "shop"}, {"id": "wr2", "name": "docs"}],
                f"{rooms}/wr1/events": [
                    {
                        "id": "e1",
                        "name": "launch",
                        "event_start_time": "2024-01-01T00:00:00Z",
                        "event_end_time": "2024-01-02T00:00:00Z",
                        "total_active_users": None,
                        "created_on": "2023-12-01T00:00:00Z",
                    }
                ],
                f"{rooms}/wr2/events": [],
            }
        )

        result = run_generation(
            request=GenerationRequest(resource_types=["cloudflare_waiting_room_event"], target=ZONE),
            source=source,
        )

        assert [call[1] for call in source.calls] == [rooms, f"{rooms}/wr1/events", f"{rooms}/wr2/events"]
        [resource] = result.resources
        assert resource.name == "terraform_managed_resource_e1"
        assert resource.import_id == f"{ZONE_ID}/wr1/e1"
        assert resource.attributes == {
            "event_end_time": "2024-01-02T00:00:00Z",
            "event_start_time": "2024-01-01T00:00:00Z",
            "name": "launch",
            "waiting_room_id": "wr1",
            "zone_id": ZONE_ID,
        }

    def test_deleted_tunnels_are_skipped(self) -> None:
        definition = get_definition("cloudflare_tunnel")
        assert definition is not None
        path = f"accounts/{ACCOUNT_ID}/cfd_tunnel"
        source = FakeSource(
            {
                path: [
                    {"id": "t1", "name": "live", "config_src": "cloudflare", "deleted_at": None},
                    {"id": "t2", "name": "gone", "config_src": "local", "deleted_at": "2023-05-01T00:00:00Z"},
                ]
            }
        )
        items = fetch_items(definition=definition, target=ACCOUNT, source=source)
        assert [item["id"] for item in items] == ["t1"]
        assert source.calls == [("list", path, {"is_deleted": "false"})]


class TestRunGeneration:
    def test_order_follows_types_then_api(self) -> None:
        source = FakeSource(
            {
                f"zones/{ZONE_ID}/dns_records": [
                    dns_record("r2", "b.example.com", "192.0.2.2"),
                    dns_record("r1", "a.example.com", "192.0.2.1"),
                ],
                f"zones/{ZONE_ID}/filters": [{"id": "f1", "expression": "true", "paused": False}],
            }
        )
        result = run_generation(
            request=GenerationRequest(resource_types=["cloudflare_filter", "cloudflare_record"], target=ZONE),
            source=source,
        )
        assert [r.name for r in result.resources] == [
            "terraform_managed_resource_f1",
            "terraform_managed_resource_r2",
            "terraform_managed_resource_r1",
        ]
        assert result.unsupported == []

    def test_unsupported_types_are_collected(self) -> None:
        result = run_generation(
            request=GenerationRequest(resource_types=["notreal"], target=ZONE),
            source=FakeSource({}),
        )
        assert result.resources == []
        assert result.unsupported == ["notreal"]

    def test_wrong_scope(self) -> None:
        source = FakeSource({})
        with pytest.raises(ConfigurationError) as excinfo:
            run_generation(
                request=GenerationRequest(resource_types=["cloudflare_record"], target=ACCOUNT),
                source=source,
            )
        assert str(excinfo.value) == '"cloudflare_record" requires --zone'
        assert source.calls == []

    def test_shared_type_under_account(self) -> None:
        source = FakeSource(
            {
                f"accounts/{ACCOUNT_ID}/firewall/access_rules/rules": [
                    {
                        "id": "ar1",
                        "mode": "block",
                        "notes": "bad actor",
                        "configuration": {"target": "ip", "value": "198.51.100.7"},
                        "allowed_modes": ["block", "challenge"],
                        "scope": {"id": ACCOUNT_ID, "type": "account"},
                    }
                ]
            }
        )
        result = run_generation(
            request=GenerationRequest(resource_types=["cloudflare_access_rule"], target=ACCOUNT),
            source=source,
        )
        resource = result.resources[0]
        assert resource.attributes == {
            "account_id": ACCOUNT_ID,
            "configuration": [{"target": "ip", "value": "198.51.100.7"}],
            "mode": "block",
            "notes": "bad actor",
        }
        assert resource.import_id == f"account/{ACCOUNT_ID}/ar1"
