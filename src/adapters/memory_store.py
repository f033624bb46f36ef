"""Record store en memoria (fixture JSON).

Formato del archivo::

    {
      "tables": {
        "configuration-definition": [{"id": "...", "displayName": "..."}],
        "configuration-value": [{"definitionId": "...", "rawText": "{...}"}]
      }
    }

Útil para la CLI sin conexión (`--records-file`) y para tests: evalúa el
mismo subset `field eq 'literal'` que genera `core.query`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel, Field

from core.query import parse_filter


class RecordsFile(BaseModel):
    tables: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)


def load_records_file(path: Path) -> RecordsFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return RecordsFile.model_validate(data)


def _matches(actual: Any, literal: str) -> bool:
    # Un campo ausente o null nunca es igual a un literal.
    if actual is None:
        return False
    return str(actual) == literal


class InMemoryRecordStore:
    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._tables = tables or {}
        self.queries: list[tuple[str, str, tuple[str, ...]]] = []

    @classmethod
    def from_file(cls, path: Path) -> InMemoryRecordStore:
        return cls(load_records_file(path).tables)

    async def query(
        self,
        table: str,
        filter_expression: str,
        select: Sequence[str],
    ) -> list[dict[str, Any]]:
        self.queries.append((table, filter_expression, tuple(select)))
        if table not in self._tables:
            raise KeyError(f"unknown table: {table}")

        terms = parse_filter(filter_expression).terms
        out: list[dict[str, Any]] = []
        for record in self._tables[table]:
            if all(_matches(record.get(field), value) for field, value in terms):
                out.append({key: record.get(key) for key in select})
        return out
