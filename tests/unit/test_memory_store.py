"""Unit tests for adapters.memory_store."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from adapters.memory_store import InMemoryRecordStore, load_records_file

_TABLES = {
    "configuration-definition": [
        {"id": "d1", "displayName": "Alpha", "extra": "ignored"},
        {"id": "d2", "displayName": "O'Neil"},
    ]
}


def test_filters_and_projects() -> None:
    store = InMemoryRecordStore(_TABLES)
    rows = asyncio.run(store.query("configuration-definition", "displayName eq 'Alpha'", ["id"]))
    assert rows == [{"id": "d1"}]


def test_escaped_literal_matches() -> None:
    store = InMemoryRecordStore(_TABLES)
    rows = asyncio.run(store.query("configuration-definition", "displayName eq 'O''Neil'", ["id", "displayName"]))
    assert rows == [{"id": "d2", "displayName": "O'Neil"}]


def test_unknown_table_raises() -> None:
    store = InMemoryRecordStore(_TABLES)
    with pytest.raises(KeyError):
        asyncio.run(store.query("nope", "id eq '1'", ["id"]))


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "records.json"
    path.write_text(json.dumps({"tables": _TABLES}), encoding="utf-8")
    assert load_records_file(path).tables == _TABLES

    store = InMemoryRecordStore.from_file(path)
    rows = asyncio.run(store.query("configuration-definition", "id eq 'd2'", ["displayName"]))
    assert rows == [{"displayName": "O'Neil"}]
    assert store.queries == [("configuration-definition", "id eq 'd2'", ("displayName",))]


@pytest.mark.parametrize("row", [{"id": "a"}, {"id": "a", "displayName": None}])
def test_missing_or_null_field_never_matches(row: dict) -> None:
    store = InMemoryRecordStore({"configuration-definition": [row]})
    rows = asyncio.run(store.query("configuration-definition", "displayName eq 'None'", ["id"]))
    assert rows == []
