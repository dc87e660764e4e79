"""Modelos del dominio.

Por qué dos sabores:
- `ResourceDefinition` es data estática del catálogo que guarda callables, así
  que es una dataclass congelada.
- Lo que cruza el borde de la API o se exporta (`ApiEnvelope`,
  `GeneratedResource`) son modelos Pydantic v2, validados en el borde.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from core.domain.scope import Scope, ScopeTarget

if TYPE_CHECKING:
    from core.interfaces.resource_source import ResourceSource


Transform = Callable[[dict[str, Any]], dict[str, Any]]
SkipPredicate = Callable[[dict[str, Any]], bool]
Expander = Callable[["ResourceSource", dict[str, Any], ScopeTarget], dict[str, Any]]
FanOut = Callable[["ResourceSource", dict[str, Any], ScopeTarget], list[dict[str, Any]]]


@dataclass(frozen=True)
class ResourceDefinition:
    """Cómo un tipo de recurso de Terraform se mapea sobre la API REST.

    Endpoint, params e import id son plantillas `str.format` sobre
    `ScopeTarget.format_values()` (más `id` en las plantillas por item). El import
    id también puede nombrar campos string del item, p.ej. `{waiting_room_id}`.

    `fan_out` convierte un padre listado en cero o más items hijos, para tipos
    que viven bajo otro objeto (eventos de un waiting room).
    """

    resource_type: str
    endpoint: str
    scopes: tuple[Scope, ...]
    singleton: bool = False
    paginate: bool = True
    params: Mapping[str, str] = field(default_factory=dict)
    detail_endpoint: str | None = None
    id_field: str = "id"
    renames: Mapping[str, str] = field(default_factory=dict)
    flatten: tuple[str, ...] = ()
    blocks: tuple[str, ...] = ()
    fields: tuple[str, ...] | None = None
    exclude: tuple[str, ...] = ()
    nested_exclude: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    skip: SkipPredicate | None = None
    transform: Transform | None = None
    expand: Expander | None = None
    fan_out: FanOut | None = None
    import_id: str = "{scope_id}/{id}"
    include_scope_attribute: bool = True

    def supports(self, scope: Scope) -> bool:
        return scope in self.scopes

    def endpoint_for(self, target: ScopeTarget) -> str:
        return self.endpoint.format(**target.format_values())

    def params_for(self, target: ScopeTarget) -> dict[str, str]:
        values = target.format_values()
        return {k: v.format(**values) for k, v in self.params.items()}

    def detail_endpoint_for(self, target: ScopeTarget, item_id: str) -> str | None:
        if self.detail_endpoint is None:
            return None
        return self.detail_endpoint.format(id=item_id, **target.format_values())

    def import_id_for(self, target: ScopeTarget, item_id: str, item: Mapping[str, Any] | None = None) -> str:
        values = {k: v for k, v in (item or {}).items() if isinstance(v, str)}
        values.update(target.format_values())
        values["id"] = item_id
        return self.import_id.format(**values)


class GeneratedResource(BaseModel):
    """Recurso de Terraform listo para renderizar."""

    resource_type: str = Field(
        ...,
        min_length=1,
        description="Tipo de recurso de Terraform (p.ej. 'cloudflare_record').",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del recurso en Terraform (segunda etiqueta del bloque).",
    )
    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Valores de atributos en orden de emisión.",
    )
    import_id: str | None = Field(
        default=None,
        description="Identificador que acepta `terraform import` para este recurso.",
    )

    @property
    def address(self) -> str:
        return f"{self.resource_type}.{self.name}"


class ApiError(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: int | None = None
    message: str = ""


class ResultCursors(BaseModel):
    model_config = ConfigDict(extra="ignore")

    before: str | None = None
    after: str | None = None


class ResultInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    page: int | None = None
    per_page: int | None = None
    count: int | None = None
    total_count: int | None = None
    total_pages: int | None = None
    cursors: ResultCursors | None = None


class ApiEnvelope(BaseModel):
    """Envelope estándar de v4: `{success, errors, messages, result}`."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    errors: list[ApiError] = Field(default_factory=list)
    messages: list[Any] = Field(default_factory=list)
    result: Any = None
    result_info: ResultInfo | None = None
