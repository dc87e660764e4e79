"""Exportación a texto de Terraform.

Por qué un exporter separado:
- El pipeline produce `GeneratedResource`; convertirlos a texto es un tema de salida.
- `core.hcl` se ocupa de valores y este módulo de archivos completos.
"""

from __future__ import annotations

import io
from typing import Iterable

from core.domain.models import GeneratedResource
from core.hcl import INDENT, format_hcl, quote_string, write_attr_line


def render_resource(resource: GeneratedResource) -> str:
    """Renderiza un bloque `resource "<type>" "<name>" { ... }`."""

    buffer = io.StringIO()
    buffer.write(f"resource {quote_string(resource.resource_type)} {quote_string(resource.name)} {{\n")
    for name, value in resource.attributes.items():
        write_attr_line(name, value, INDENT, buffer)
    buffer.write("}\n")
    return format_hcl(buffer.getvalue())


def render_resources(resources: Iterable[GeneratedResource]) -> str:
    """Renderiza todos los bloques, separados por una línea en blanco."""

    return "\n".join(render_resource(r) for r in resources)


def render_import_commands(resources: Iterable[GeneratedResource]) -> str:
    """`terraform import <address> <id>`, una línea por recurso."""

    lines = [f"terraform import {r.address} {r.import_id}" for r in resources if r.import_id]
    return "".join(line + "\n" for line in lines)


def render_import_blocks(resources: Iterable[GeneratedResource]) -> str:
    """Bloques `import` de Terraform 1.5+."""

    blocks = []
    for r in resources:
        if not r.import_id:
            continue
        blocks.append(
            "import {\n"
            f"{INDENT}to = {r.address}\n"
            f"{INDENT}id = {quote_string(r.import_id)}\n"
            "}\n"
        )
    return "\n".join(blocks)

