"""Tipos de recurso con scope de zona."""

from __future__ import annotations

from core.catalog import transforms
from core.domain.models import ResourceDefinition
from core.domain.scope import Scope

ZONE = (Scope.ZONE,)


ZONE_DEFINITIONS: tuple[ResourceDefinition, ...] = (
    ResourceDefinition(
        resource_type="cloudflare_record",
        endpoint="{prefix}/dns_records",
        scopes=ZONE,
        transform=transforms.dns_record,
        fields=("name", "type", "value", "ttl", "proxied", "priority", "comment", "tags", "data"),
        blocks=("data",),
    ),
    ResourceDefinition(
        resource_type="cloudflare_page_rule",
        endpoint="{prefix}/pagerules",
        scopes=ZONE,
        paginate=False,
        transform=transforms.page_rule,
        fields=("target", "priority", "status", "actions"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_filter",
        endpoint="{prefix}/filters",
        scopes=ZONE,
        fields=("expression", "paused", "description", "ref"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_firewall_rule",
        endpoint="{prefix}/firewall/rules",
        scopes=ZONE,
        transform=transforms.firewall_rule,
        fields=("action", "description", "filter_id", "paused", "priority", "products"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_rate_limit",
        endpoint="{prefix}/rate_limits",
        scopes=ZONE,
        fields=(
            "threshold",
            "period",
            "match",
            "action",
            "disabled",
            "description",
            "bypass_url_patterns",
            "correlate",
        ),
        blocks=("match", "action", "correlate"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_zone_lockdown",
        endpoint="{prefix}/firewall/lockdowns",
        scopes=ZONE,
        fields=("paused", "description", "urls", "configurations", "priority"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_user_agent_blocking_rule",
        endpoint="{prefix}/firewall/ua_rules",
        scopes=ZONE,
        fields=("mode", "paused", "description", "configuration"),
        blocks=("configuration",),
    ),
    ResourceDefinition(
        resource_type="cloudflare_healthcheck",
        endpoint="{prefix}/healthchecks",
        scopes=ZONE,
        flatten=("http_config", "tcp_config"),
        transform=transforms.healthcheck,
        fields=(
            "name",
            "address",
            "type",
            "description",
            "check_regions",
            "consecutive_fails",
            "consecutive_successes",
            "interval",
            "retries",
            "timeout",
            "suspended",
            "method",
            "port",
            "path",
            "expected_codes",
            "expected_body",
            "follow_redirects",
            "allow_insecure",
            "header",
        ),
    ),
    ResourceDefinition(
        resource_type="cloudflare_custom_hostname",
        endpoint="{prefix}/custom_hostnames",
        scopes=ZONE,
        transform=transforms.custom_hostname,
        fields=("hostname", "custom_origin_server", "custom_origin_sni", "ssl", "custom_metadata"),
        blocks=("ssl",),
    ),
    ResourceDefinition(
        resource_type="cloudflare_custom_hostname_fallback_origin",
        endpoint="{prefix}/custom_hostnames/fallback_origin",
        scopes=ZONE,
        singleton=True,
        fields=("origin",),
        import_id="{zone_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_certificate_pack",
        endpoint="{prefix}/ssl/certificate_packs",
        scopes=ZONE,
        skip=transforms.certificate_pack_is_universal,
        fields=(
            "type",
            "hosts",
            "validation_method",
            "validity_days",
            "certificate_authority",
            "cloudflare_branding",
        ),
    ),
    ResourceDefinition(
        resource_type="cloudflare_spectrum_application",
        endpoint="{prefix}/spectrum/apps",
        scopes=ZONE,
        fields=(
            "protocol",
            "dns",
            "origin_direct",
            "origin_port",
            "origin_dns",
            "tls",
            "ip_firewall",
            "proxy_protocol",
            "traffic_type",
            "edge_ips",
            "argo_smart_routing",
        ),
        blocks=("dns", "origin_dns", "edge_ips"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_waiting_room",
        endpoint="{prefix}/waiting_rooms",
        scopes=ZONE,
        fields=(
            "name",
            "host",
            "path",
            "new_users_per_minute",
            "total_active_users",
            "session_duration",
            "description",
            "disable_session_renewal",
            "suspended",
            "queue_all",
            "json_response_enabled",
            "default_template_language",
            "custom_page_html",
            "cookie_suffix",
            "queueing_method",
            "additional_routes",
        ),
    ),
    ResourceDefinition(
        resource_type="cloudflare_waiting_room_event",
        endpoint="{prefix}/waiting_rooms",
        scopes=ZONE,
        fan_out=transforms.fan_out_waiting_room_events,
        fields=(
            "waiting_room_id",
            "name",
            "event_start_time",
            "event_end_time",
            "prequeue_start_time",
            "total_active_users",
            "new_users_per_minute",
            "session_duration",
            "queueing_method",
            "shuffle_at_event_start",
            "disable_session_renewal",
            "suspended",
            "description",
            "custom_page_html",
        ),
        import_id="{zone_id}/{waiting_room_id}/{id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_waiting_room_rules",
        endpoint="{prefix}/waiting_rooms",
        scopes=ZONE,
        fan_out=transforms.fan_out_waiting_room_rules,
        fields=("waiting_room_id", "rules"),
        import_id="{zone_id}/{waiting_room_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_waiting_room_settings",
        endpoint="{prefix}/waiting_rooms/settings",
        scopes=ZONE,
        singleton=True,
        fields=("search_engine_crawler_bypass",),
        import_id="{zone_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_worker_route",
        endpoint="{prefix}/workers/routes",
        scopes=ZONE,
        paginate=False,
        renames={"script": "script_name"},
        fields=("pattern", "script_name"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_load_balancer",
        endpoint="{prefix}/load_balancers",
        scopes=ZONE,
        paginate=False,
        transform=transforms.load_balancer,
        renames={"fallback_pool": "fallback_pool_id", "default_pools": "default_pool_ids"},
        fields=(
            "name",
            "fallback_pool_id",
            "default_pool_ids",
            "proxied",
            "ttl",
            "steering_policy",
            "session_affinity",
            "session_affinity_ttl",
            "description",
            "enabled",
            "region_pools",
            "pop_pools",
            "country_pools",
        ),
    ),
    ResourceDefinition(
        resource_type="cloudflare_managed_headers",
        endpoint="{prefix}/managed_headers",
        scopes=ZONE,
        singleton=True,
        transform=transforms.managed_headers,
        import_id="{zone_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_tiered_cache",
        endpoint="{prefix}/cache/tiered_cache_smart_topology_enable",
        scopes=ZONE,
        singleton=True,
        transform=transforms.tiered_cache,
        import_id="{zone_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_argo",
        endpoint="{prefix}/argo/smart_routing",
        scopes=ZONE,
        singleton=True,
        expand=transforms.expand_argo,
        transform=transforms.argo,
        import_id="{zone_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_url_normalization_settings",
        endpoint="{prefix}/url_normalization",
        scopes=ZONE,
        singleton=True,
        fields=("type", "scope"),
        import_id="{zone_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_bot_management",
        endpoint="{prefix}/bot_management",
        scopes=ZONE,
        singleton=True,
        fields=(
            "enable_js",
            "fight_mode",
            "sbfm_definitely_automated",
            "sbfm_likely_automated",
            "sbfm_verified_bots",
            "sbfm_static_resource_protection",
            "optimize_wordpress",
            "suppress_session_score",
            "auto_update_model",
            "ai_bots_protection",
        ),
        import_id="{zone_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_api_shield",
        endpoint="{prefix}/api_gateway/configuration",
        scopes=ZONE,
        singleton=True,
        fields=("auth_id_characteristics",),
        import_id="{zone_id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_ruleset",
        endpoint="{prefix}/rulesets",
        scopes=ZONE,
        paginate=False,
        detail_endpoint="{prefix}/rulesets/{id}",
        skip=transforms.ruleset_is_managed,
        fields=("name", "description", "kind", "phase", "rules"),
        nested_exclude={"rules": ("id", "version", "last_updated", "ref")},
        import_id="zone/{zone_id}/{id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_origin_ca_certificate",
        endpoint="certificates",
        scopes=ZONE,
        paginate=False,
        params={"zone_id": "{zone_id}"},
        fields=("hostnames", "request_type", "requested_validity", "csr"),
        import_id="{id}",
        include_scope_attribute=False,
    ),
)
