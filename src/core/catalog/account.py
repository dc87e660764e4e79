"""Tipos de recurso con scope de cuenta, más los que viven bajo cualquiera de los dos scopes."""

from __future__ import annotations

from core.catalog import transforms
from core.domain.models import ResourceDefinition
from core.domain.scope import Scope

ACCOUNT = (Scope.ACCOUNT,)
ACCOUNT_OR_ZONE = (Scope.ACCOUNT, Scope.ZONE)


ACCOUNT_DEFINITIONS: tuple[ResourceDefinition, ...] = (
    ResourceDefinition(
        resource_type="cloudflare_account_member",
        endpoint="{prefix}/members",
        scopes=ACCOUNT,
        transform=transforms.account_member,
        fields=("email_address", "role_ids", "status"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_workers_kv_namespace",
        endpoint="{prefix}/storage/kv/namespaces",
        scopes=ACCOUNT,
        fields=("title",),
    ),
    ResourceDefinition(
        resource_type="cloudflare_list",
        endpoint="{prefix}/rules/lists",
        scopes=ACCOUNT,
        paginate=False,
        expand=transforms.expand_list_items,
        fields=("name", "kind", "description", "item"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_load_balancer_pool",
        endpoint="{prefix}/load_balancers/pools",
        scopes=ACCOUNT,
        fields=(
            "name",
            "origins",
            "enabled",
            "minimum_origins",
            "monitor",
            "description",
            "notification_email",
            "check_regions",
            "latitude",
            "longitude",
            "origin_steering",
        ),
        blocks=("origin_steering",),
        nested_exclude={"origins": ("disabled_at", "healthy", "failure_reason")},
    ),
    ResourceDefinition(
        resource_type="cloudflare_load_balancer_monitor",
        endpoint="{prefix}/load_balancers/monitors",
        scopes=ACCOUNT,
        transform=transforms.healthcheck,
        fields=(
            "type",
            "description",
            "method",
            "path",
            "port",
            "timeout",
            "retries",
            "interval",
            "expected_body",
            "expected_codes",
            "follow_redirects",
            "allow_insecure",
            "probe_zone",
            "consecutive_down",
            "consecutive_up",
            "header",
        ),
    ),
    ResourceDefinition(
        resource_type="cloudflare_byo_ip_prefix",
        endpoint="{prefix}/addressing/prefixes",
        scopes=ACCOUNT,
        transform=transforms.byo_ip_prefix,
        fields=("prefix_id", "description", "advertisement"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_tunnel",
        endpoint="{prefix}/cfd_tunnel",
        scopes=ACCOUNT,
        params={"is_deleted": "false"},
        skip=transforms.tunnel_is_deleted,
        fields=("name", "config_src"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_teams_list",
        endpoint="{prefix}/gateway/lists",
        scopes=ACCOUNT,
        paginate=False,
        expand=transforms.expand_teams_list_items,
        fields=("name", "type", "description", "items"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_teams_location",
        endpoint="{prefix}/gateway/locations",
        scopes=ACCOUNT,
        paginate=False,
        fields=("name", "client_default", "ecs_support", "networks"),
        nested_exclude={"networks": ("id",)},
    ),
    ResourceDefinition(
        resource_type="cloudflare_teams_proxy_endpoint",
        endpoint="{prefix}/gateway/proxy_endpoints",
        scopes=ACCOUNT,
        paginate=False,
        fields=("name", "ips"),
    ),
    ResourceDefinition(
        resource_type="cloudflare_teams_rule",
        endpoint="{prefix}/gateway/rules",
        scopes=ACCOUNT,
        paginate=False,
        fields=(
            "name",
            "description",
            "precedence",
            "enabled",
            "action",
            "filters",
            "traffic",
            "identity",
            "device_posture",
            "rule_settings",
        ),
        blocks=("rule_settings",),
    ),
    ResourceDefinition(
        resource_type="cloudflare_turnstile_widget",
        endpoint="{prefix}/challenges/widgets",
        scopes=ACCOUNT,
        id_field="sitekey",
        fields=("name", "domains", "mode", "region", "bot_fight_mode", "offlabel"),
    ),
)


SHARED_DEFINITIONS: tuple[ResourceDefinition, ...] = (
    ResourceDefinition(
        resource_type="cloudflare_access_application",
        endpoint="{prefix}/access/apps",
        scopes=ACCOUNT_OR_ZONE,
        fields=(
            "name",
            "domain",
            "type",
            "session_duration",
            "auto_redirect_to_identity",
            "allowed_idps",
            "app_launcher_visible",
            "enable_binding_cookie",
            "http_only_cookie_attribute",
            "same_site_cookie_attribute",
            "logo_url",
            "skip_interstitial",
            "service_auth_401_redirect",
            "custom_deny_message",
            "custom_deny_url",
            "cors_headers",
        ),
        blocks=("cors_headers",),
        import_id="{prefix}/{id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_access_identity_provider",
        endpoint="{prefix}/access/identity_providers",
        scopes=ACCOUNT_OR_ZONE,
        fields=("name", "type", "config", "scim_config"),
        blocks=("config", "scim_config"),
        import_id="{prefix}/{id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_access_rule",
        endpoint="{prefix}/firewall/access_rules/rules",
        scopes=ACCOUNT_OR_ZONE,
        fields=("mode", "notes", "configuration"),
        blocks=("configuration",),
        import_id="{scope}/{scope_id}/{id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_custom_pages",
        endpoint="{prefix}/custom_pages",
        scopes=ACCOUNT_OR_ZONE,
        paginate=False,
        skip=transforms.custom_page_is_default,
        transform=transforms.custom_pages,
        fields=("type", "url", "state"),
        import_id="{scope}/{scope_id}/{id}",
    ),
    ResourceDefinition(
        resource_type="cloudflare_logpush_job",
        endpoint="{prefix}/logpush/jobs",
        scopes=ACCOUNT_OR_ZONE,
        paginate=False,
        fields=(
            "dataset",
            "destination_conf",
            "enabled",
            "frequency",
            "logpull_options",
            "name",
            "filter",
            "kind",
            "max_upload_bytes",
            "max_upload_interval_seconds",
            "max_upload_records",
            "output_options",
        ),
        blocks=("output_options",),
        import_id="{scope}/{scope_id}/{id}",
    ),
)
