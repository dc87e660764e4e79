"""Configuración de logging.

Stdout queda reservado para la configuración generada; los logs van a stderr
vía Rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx loguea cada request en INFO; el SDK de Cloudflare, sus reintentos.
    for name in ("httpx", "cloudflare"):
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
