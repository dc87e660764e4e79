"""Typer application.

Stdout carries generated configuration only; banners, tables, errors and log
records go to stderr.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Annotated, Optional

import typer
from rich.console import Console

from adapters.cloudflare_api import open_client
from adapters.terraform_exporter import render_import_blocks, render_import_commands, render_resources
from cli import doctor
from cli.ui_components import build_resource_types_table, print_error
from core.catalog import get_definition, is_supported, supported_resource_types
from core.config import AppSettings
from core.domain.models import GeneratedResource
from core.domain.scope import Scope, ScopeTarget
from core.errors import CFTerraformingError
from core.log import configure_logging
from core.services.generation_pipeline import GenerationRequest, parse_resource_types, run_generation

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Generate Terraform configuration and import commands from existing Cloudflare resources.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console(stderr=True)

UNSUPPORTED_MESSAGE = '"{resource_type}" is not yet supported for automatic generation'

ResourceTypeOption = Annotated[
    str,
    typer.Option("--resource-type", "-r", help="Resource type(s) to export, comma separated."),
]
AccountOption = Annotated[
    Optional[str],
    typer.Option("--account", "-a", help="Account ID to use (env: CLOUDFLARE_ACCOUNT_ID)."),
]
ZoneOption = Annotated[
    Optional[str],
    typer.Option("--zone", "-z", help="Zone ID to use (env: CLOUDFLARE_ZONE_ID)."),
]
EmailOption = Annotated[Optional[str], typer.Option("--email", "-e", help="Account email (global API key auth).")]
KeyOption = Annotated[Optional[str], typer.Option("--key", "-k", help="Global API key.")]
TokenOption = Annotated[Optional[str], typer.Option("--token", "-t", help="API token.")]
HostnameOption = Annotated[Optional[str], typer.Option("--hostname", help="Hostname of the Cloudflare API.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")]


def load_settings(**overrides: Optional[str]) -> AppSettings:
    """Environment/.env settings with non-empty CLI values applied on top."""

    settings = AppSettings()
    update = {k: v for k, v in overrides.items() if v}
    return settings.model_copy(update=update) if update else settings


def resolve_target(account: Optional[str], zone: Optional[str], settings: AppSettings) -> ScopeTarget:
    """Pick the scope from the flags, falling back to the environment."""

    if account and zone:
        raise typer.BadParameter("--account and --zone are mutually exclusive", param_hint="--account/--zone")
    if not account and not zone:
        if settings.account_id and settings.zone_id:
            raise typer.BadParameter(
                "both CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_ZONE_ID are set; pass --account or --zone",
                param_hint="--account/--zone",
            )
        account, zone = settings.account_id, settings.zone_id

    target = Scope.from_identifiers(account, zone)
    if target is None:
        raise typer.BadParameter("one of --account or --zone is required", param_hint="--account/--zone")
    return target


def _generate(
    *,
    resource_type: str,
    account: Optional[str],
    zone: Optional[str],
    email: Optional[str],
    key: Optional[str],
    token: Optional[str],
    hostname: Optional[str],
    verbose: bool,
) -> list[GeneratedResource] | None:
    """Shared body of `generate` and `import`; `None` means nothing to print."""

    configure_logging(verbose)

    resource_types = parse_resource_types(resource_type)
    if not resource_types:
        raise typer.BadParameter("at least one resource type is required", param_hint="--resource-type")

    unsupported = [t for t in resource_types if not is_supported(t)]
    if unsupported:
        typer.echo(UNSUPPORTED_MESSAGE.format(resource_type=unsupported[0]), nl=False)
        return None

    settings = load_settings(api_token=token, email=email, api_key=key, api_hostname=hostname)
    target = resolve_target(account, zone, settings)

    try:
        with open_client(settings) as client:
            result = run_generation(
                request=GenerationRequest(resource_types=resource_types, target=target),
                source=client,
            )
    except CFTerraformingError as exc:
        print_error(_console, exc)
        raise typer.Exit(code=1) from exc

    return result.resources


@app.command()
def generate(
    resource_type: ResourceTypeOption,
    account: AccountOption = None,
    zone: ZoneOption = None,
    email: EmailOption = None,
    key: KeyOption = None,
    token: TokenOption = None,
    hostname: HostnameOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Fetch resources and print Terraform configuration for them."""

    resources = _generate(
        resource_type=resource_type,
        account=account,
        zone=zone,
        email=email,
        key=key,
        token=token,
        hostname=hostname,
        verbose=verbose,
    )
    if resources:
        typer.echo(render_resources(resources), nl=False)


@app.command(name="import")
def import_(
    resource_type: ResourceTypeOption,
    account: AccountOption = None,
    zone: ZoneOption = None,
    email: EmailOption = None,
    key: KeyOption = None,
    token: TokenOption = None,
    hostname: HostnameOption = None,
    verbose: VerboseOption = False,
    modern_import_block: Annotated[
        bool,
        typer.Option("--modern-import-block", help="Print Terraform 1.5+ `import` blocks instead of commands."),
    ] = False,
) -> None:
    """Print `terraform import` commands (or import blocks) for existing resources."""

    resources = _generate(
        resource_type=resource_type,
        account=account,
        zone=zone,
        email=email,
        key=key,
        token=token,
        hostname=hostname,
        verbose=verbose,
    )
    if not resources:
        return
    if modern_import_block:
        typer.echo(render_import_blocks(resources), nl=False)
    else:
        typer.echo(render_import_commands(resources), nl=False)


@app.command(name="resource-types")
def resource_types() -> None:
    """List the supported resource types."""

    definitions = [get_definition(name) for name in supported_resource_types()]
    _console.print(build_resource_types_table(d for d in definitions if d is not None))


@app.command(name="version")
def version_() -> None:
    """Print the installed version."""

    try:
        current = package_version("cf-terraforming")
    except PackageNotFoundError:
        current = "dev"
    typer.echo(f"cf-terraforming {current}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
