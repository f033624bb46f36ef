"""Shared test fixtures for envroute.

Fakes here stand in for the host collaborators (record store, environment,
busy indicator) so the core can be exercised without Dataverse or a network.
"""
from __future__ import annotations

import json
from typing import Any, Sequence

import httpx
import pytest

from adapters.http_client import HttpxTransport, build_async_client
from core.config import AppSettings
from core.domain.models import DEFAULT_SCHEMA

ENDPOINT_MAP = {
    "Endpoints": [
        {"environment": "E1", "endpoint": "https://a.example/hook"},
        {"environment": "E2", "endpoint": "https://b.example/hook"},
    ]
}


class StubRecordStore:
    """Returns canned rows per table and records every query."""

    def __init__(
        self,
        rows: dict[str, list[dict[str, Any]]] | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.rows = rows or {}
        self.error = error
        self.queries: list[tuple[str, str, tuple[str, ...]]] = []

    async def query(
        self,
        table: str,
        filter_expression: str,
        select: Sequence[str],
    ) -> list[dict[str, Any]]:
        self.queries.append((table, filter_expression, tuple(select)))
        if self.error is not None:
            raise self.error
        return list(self.rows.get(table, []))


class StaticEnv:
    def __init__(self, environment: str) -> None:
        self.environment = environment

    def current_environment(self) -> str:
        return self.environment


class RecordingSink:
    """Records busy/clear/error calls in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def show_busy(self, message: str) -> None:
        self.events.append(("show", message))

    def clear_busy(self) -> None:
        self.events.append(("clear", None))

    def log_error(self, context: str, error: BaseException) -> None:
        self.events.append(("error", error))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


def config_rows(raw_text: str = json.dumps(ENDPOINT_MAP), definition_id: str = "def-1") -> dict[str, list[dict[str, Any]]]:
    return {
        DEFAULT_SCHEMA.definition_table: [
            {
                DEFAULT_SCHEMA.definition_id_field: definition_id,
                DEFAULT_SCHEMA.definition_name_field: "Demo - Endpoint Addresses",
            }
        ],
        DEFAULT_SCHEMA.value_table: [{DEFAULT_SCHEMA.value_text_field: raw_text}],
    }


def mock_transport(handler) -> tuple[HttpxTransport, list[httpx.Request]]:
    """HttpxTransport over httpx.MockTransport; returns the captured requests too."""

    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = build_async_client(AppSettings(_env_file=None), transport=httpx.MockTransport(_handler))
    return HttpxTransport(client=client), seen


@pytest.fixture()
def endpoint_map_json() -> str:
    return json.dumps(ENDPOINT_MAP)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()
