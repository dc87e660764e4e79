"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (cliente HTTP, cassettes) lean credenciales de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "cf-terraforming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "cf-terraforming"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "cf-terraforming"
    return Path.home() / ".config" / "cf-terraforming"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v})

    lines = ["# cf-terraforming user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Cada campo corresponde a una variable `CLOUDFLARE_*`: las mismas que lee el
    provider de Terraform.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLOUDFLARE_",
        extra="ignore",
        case_sensitive=False,
        # Primero el proyecto (dev), luego la config global del usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_token: str | None = Field(
        default=None,
        description="API token con scope (preferido sobre email + global key).",
    )
    email: str | None = Field(
        default=None,
        description="Email de la cuenta, usado con la global API key.",
    )
    api_key: str | None = Field(
        default=None,
        description="Global API key (autenticación legacy).",
    )
    api_hostname: str = Field(
        default="api.cloudflare.com",
        min_length=1,
        description="Hostname de la API de Cloudflare.",
    )
    api_base_path: str = Field(
        default="/client/v4",
        description="Path base de la API REST versionada.",
    )

    account_id: str | None = Field(
        default=None,
        description="Scope de cuenta por defecto si no se pasa --account.",
    )
    zone_id: str | None = Field(
        default=None,
        description="Scope de zona por defecto si no se pasa --zone.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="cf-terraforming-py/0.1",
        min_length=1,
        description="User-Agent para peticiones a la API.",
    )
    per_page: int = Field(
        default=100,
        ge=5,
        le=1000,
        description="Tamaño de página para endpoints paginados.",
    )

    @property
    def base_url(self) -> str:
        return f"https://{self.api_hostname}{self.api_base_path}"

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_token) or bool(self.email and self.api_key)
