"""Resource scopes.

Cloudflare resources live either under an account or under a zone. Keeping
the scope in the domain layer lets the catalog, the pipeline and the CLI share
one definition without importing each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Scope(str, Enum):
    """Which identifier selects the resources to enumerate."""

    ACCOUNT = "account"
    ZONE = "zone"

    @classmethod
    def from_identifiers(cls, account_id: str | None, zone_id: str | None) -> "ScopeTarget | None":
        """Build a target from whichever identifier is set (account wins ties).

        Callers validate mutual exclusion before calling this.
        """

        if account_id:
            return ScopeTarget(cls.ACCOUNT, account_id)
        if zone_id:
            return ScopeTarget(cls.ZONE, zone_id)
        return None

    @property
    def id_attribute(self) -> str:
        """Terraform attribute carrying the scope identifier."""

        return "account_id" if self is Scope.ACCOUNT else "zone_id"

    def path_prefix(self, identifier: str) -> str:
        return f"accounts/{identifier}" if self is Scope.ACCOUNT else f"zones/{identifier}"


@dataclass(frozen=True)
class ScopeTarget:
    scope: Scope
    identifier: str

    def format_values(self) -> dict[str, str]:
        """Placeholders available to endpoint and import-id templates."""

        return {
            "prefix": self.scope.path_prefix(self.identifier),
            "scope": self.scope.value,
            "scope_id": self.identifier,
            "account_id": self.identifier if self.scope is Scope.ACCOUNT else "",
            "zone_id": self.identifier if self.scope is Scope.ZONE else "",
        }
