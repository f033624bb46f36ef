"""Resolución de configuración en dos saltos (definición -> valor).

Flujo:
1) Busca la definición por `displayName`; exige exactamente una fila.
2) Con su id busca el registro de valor; exige exactamente una fila no vacía.

No hay reintentos ni caché: cada llamada consulta el store desde cero.
"""

from __future__ import annotations

from typing import Any, Sequence

import structlog

from core.domain.models import DEFAULT_SCHEMA, ConfigDefinition, ConfigValue, RecordSchema
from core.errors import ConfigNotFound, ConfigValueMissing, MalformedConfig, RecordStoreError
from core.interfaces.record_store import RecordStore
from core.query import FilterExpression

logger = structlog.get_logger(__name__)


class ConfigResolver:
    def __init__(self, store: RecordStore, schema: RecordSchema = DEFAULT_SCHEMA) -> None:
        self._store = store
        self._schema = schema

    async def resolve(self, name: str) -> ConfigValue:
        definition = await self.find_definition(name)
        return await self.find_value(name, definition)

    async def find_definition(self, name: str) -> ConfigDefinition:
        schema = self._schema
        flt = FilterExpression.eq(schema.definition_name_field, name)
        rows = await self._query(
            name,
            schema.definition_table,
            flt,
            (schema.definition_id_field, schema.definition_name_field),
        )
        if len(rows) != 1:
            raise ConfigNotFound(name, len(rows))

        row = rows[0]
        definition_id = row.get(schema.definition_id_field)
        if not definition_id:
            raise MalformedConfig(f'definition "{name}" has no {schema.definition_id_field}')
        definition = ConfigDefinition(
            id=str(definition_id),
            display_name=str(row.get(schema.definition_name_field) or name),
        )
        logger.debug("config_definition_found", name=name, definition_id=definition.id)
        return definition

    async def find_value(self, name: str, definition: ConfigDefinition) -> ConfigValue:
        schema = self._schema
        flt = FilterExpression.eq(schema.value_definition_field, definition.id)
        rows = await self._query(
            name,
            schema.value_table,
            flt,
            (schema.value_text_field,),
        )
        if len(rows) != 1:
            raise ConfigValueMissing(name, definition.id, len(rows))

        raw_text = rows[0].get(schema.value_text_field)
        if not isinstance(raw_text, str) or not raw_text:
            raise ConfigValueMissing(name, definition.id, 1)

        logger.debug("config_value_found", name=name, definition_id=definition.id)
        return ConfigValue(definition_id=definition.id, raw_text=raw_text)

    async def _query(
        self,
        name: str,
        table: str,
        flt: FilterExpression,
        select: Sequence[str],
    ) -> list[dict[str, Any]]:
        filter_expression = flt.render()
        try:
            return list(await self._store.query(table, filter_expression, select))
        except Exception as exc:
            raise RecordStoreError(table, filter_expression, name) from exc
