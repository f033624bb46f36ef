"""Modelos del dominio (Pydantic v2 + dataclasses).

Por qué Pydantic en el dominio:
- El mapa de endpoints llega como JSON embebido en un registro; validarlo con
  un modelo da errores precisos sin parseo manual.
- Los registros de configuración son de solo lectura para el Core.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
- Los resultados de dispatch son dataclasses porque transportan objetos
  vivos (respuesta HTTP, excepción) que no tiene sentido serializar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

if TYPE_CHECKING:
    import httpx

    from core.errors import EnvRouteError


class ConfigDefinition(BaseModel):
    """Definición nombrada de una variable de configuración."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Identificador opaco de la definición.",
    )
    display_name: str = Field(
        ...,
        description="Nombre visible; clave de búsqueda (único en la práctica, no garantizado).",
    )


class ConfigValue(BaseModel):
    """Texto configurado para una definición (se espera JSON)."""

    model_config = ConfigDict(frozen=True)

    definition_id: str = Field(
        ...,
        min_length=1,
        description="Referencia a `ConfigDefinition.id`.",
    )
    raw_text: str = Field(
        ...,
        description="Carga útil textual tal cual está almacenada.",
    )


class EndpointEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    environment: str = Field(
        ...,
        description="Entorno (típicamente URL base de la organización).",
    )
    endpoint: str = Field(
        ...,
        description="URL a invocar cuando el entorno coincide.",
    )


class EndpointMap(BaseModel):
    """Forma decodificada de `ConfigValue.raw_text`.

    Wire format::

        {"Endpoints": [{"environment": "...", "endpoint": "..."}]}

    El orden se conserva; si hay entornos duplicados gana el primero.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    endpoints: list[EndpointEntry] = Field(
        ...,
        alias="Endpoints",
        description="Asociaciones entorno -> endpoint en orden de declaración.",
    )


@dataclass(frozen=True)
class RecordSchema:
    """Nombres físicos de tablas y campos del par definición/valor."""

    definition_table: str
    definition_id_field: str
    definition_name_field: str
    value_table: str
    value_definition_field: str
    value_text_field: str


DEFAULT_SCHEMA = RecordSchema(
    definition_table="configuration-definition",
    definition_id_field="id",
    definition_name_field="displayName",
    value_table="configuration-value",
    value_definition_field="definitionId",
    value_text_field="rawText",
)

# Tablas de variables de entorno de Dataverse (nombres de entity set de la Web API).
DATAVERSE_SCHEMA = RecordSchema(
    definition_table="environmentvariabledefinitions",
    definition_id_field="environmentvariabledefinitionid",
    definition_name_field="displayname",
    value_table="environmentvariablevalues",
    value_definition_field="_environmentvariabledefinitionid_value",
    value_text_field="value",
)

SCHEMAS: dict[str, RecordSchema] = {
    "default": DEFAULT_SCHEMA,
    "dataverse": DATAVERSE_SCHEMA,
}


@dataclass(frozen=True)
class Success:
    response: httpx.Response
    kind: Literal["success"] = "success"


@dataclass(frozen=True)
class Failure:
    status_code: int
    status_text: str
    kind: Literal["failure"] = "failure"


@dataclass(frozen=True)
class TransportFailure:
    cause: BaseException
    kind: Literal["transport_error"] = "transport_error"


RequestOutcome = Union[Success, Failure, TransportFailure]


@dataclass
class ActionResult:
    """Output of one orchestrated action."""

    endpoint: str | None = None
    outcome: RequestOutcome | None = None
    error: EnvRouteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and isinstance(self.outcome, Success)
