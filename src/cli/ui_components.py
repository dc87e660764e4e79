"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.

Todo se imprime en la consola que pasa quien llama; los comandos usan una
consola sobre stderr para que stdout quede limpio para la configuración generada.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ResourceDefinition


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Los comandos no interactivos (generate/import) nunca lo llaman.
    """

    title = Text("cf-terraforming", style="bold cyan")
    subtitle = Text("Cloudflare resources • Terraform configuration", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def print_error(console: Console, error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] [red]{escape(str(error))}[/red]", highlight=False)


def build_resource_types_table(definitions: Iterable[ResourceDefinition]) -> Table:
    """Tabla de tipos de recurso soportados y los scopes que aceptan."""

    table = Table(title="Supported resource types")
    table.add_column("Resource type", style="cyan", no_wrap=True)
    table.add_column("Scopes", style="white")
    table.add_column("Singleton", style="dim")
    for definition in definitions:
        table.add_row(
            definition.resource_type,
            ", ".join(scope.value for scope in definition.scopes),
            "yes" if definition.singleton else "",
        )
    return table


def build_doctor_table() -> Table:
    table = Table(title="cf-terraforming doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
