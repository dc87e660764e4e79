"""Errores de la aplicación.

Todo lo que se lanza a propósito deriva de `CFTerraformingError`; así la CLI
tiene un único punto para convertir fallos en mensaje y código de salida.
"""

from __future__ import annotations

from typing import Any


class CFTerraformingError(Exception):
    """Error base con un mensaje para el usuario."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(CFTerraformingError):
    """Faltan credenciales, hay scopes en conflicto o el scope no está soportado."""


class CloudflareAPIError(CFTerraformingError):
    """La API respondió con un envelope de error, un status inválido o no respondió."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.insert(0, f"HTTP {self.status_code}:")
        for err in self.errors:
            code = err.get("code")
            text = err.get("message", "")
            parts.append(f"{text} ({code})" if code is not None else str(text))
        return " ".join(p for p in parts if p)


class CassetteError(CFTerraformingError):
    """Una request reproducida no tiene interacción grabada."""
