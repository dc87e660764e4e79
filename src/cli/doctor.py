"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console

from adapters.cloudflare_api import open_client
from cli.ui_components import build_doctor_table, print_banner
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.errors import CFTerraformingError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console(stderr=True)


def _check_credentials(settings: AppSettings) -> tuple[bool, str]:
    """Call the API with the configured credentials."""

    try:
        with open_client(settings) as client:
            if settings.api_token:
                info = client.verify_token()
                status = info.get("status", "unknown")
                return status == "active", f"token {status}"
            user = client.current_user()
            return True, f"authenticated as {user.get('email', settings.email)}"
    except CFTerraformingError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = build_doctor_table()

    # Config
    if settings.api_token:
        table.add_row("Credentials", "OK", "API token")
    elif settings.email and settings.api_key:
        table.add_row("Credentials", "OK", "Email + global API key")
    else:
        table.add_row("Credentials", "MISSING", f"Run `cf-terraforming doctor setup` (writes {get_user_env_file()})")
    table.add_row("API base URL", "OK", settings.base_url)
    if settings.account_id:
        table.add_row("Default scope", "OK", f"account {settings.account_id}")
    elif settings.zone_id:
        table.add_row("Default scope", "OK", f"zone {settings.zone_id}")
    else:
        table.add_row("Default scope", "OPTIONAL", "Pass --account or --zone per command")

    # Connectivity
    ok_api = False
    if settings.has_credentials:
        ok_api, detail_api = _check_credentials(settings)
        table.add_row("API access", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API access", "SKIPPED", "No credentials")

    _console.print(table)

    if settings.has_credentials and not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Check that the token has read permissions for the resources you export."
        )
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env).

    Saves the same `CLOUDFLARE_*` variables the environment would provide.
    """

    method = typer.prompt(
        "Authentication method (token/key)",
        default="token",
        show_default=True,
    ).strip().lower()

    values: dict[str, str | None] = {}
    if method == "token":
        required = ("CLOUDFLARE_API_TOKEN",)
        values["CLOUDFLARE_API_TOKEN"] = typer.prompt("API token", hide_input=True).strip()
    elif method == "key":
        required = ("CLOUDFLARE_EMAIL", "CLOUDFLARE_API_KEY")
        values["CLOUDFLARE_EMAIL"] = typer.prompt("Account email").strip()
        values["CLOUDFLARE_API_KEY"] = typer.prompt("Global API key", hide_input=True).strip()
    else:
        raise typer.BadParameter("authentication method must be 'token' or 'key'")

    values["CLOUDFLARE_ACCOUNT_ID"] = typer.prompt("Default account ID", default="", show_default=False).strip()
    values["CLOUDFLARE_ZONE_ID"] = typer.prompt("Default zone ID", default="", show_default=False).strip()

    missing = [key for key in required if not values.get(key)]
    if missing:
        raise typer.BadParameter(f"credentials are required: {', '.join(missing)}")

    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
