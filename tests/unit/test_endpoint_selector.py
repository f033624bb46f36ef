"""Unit tests for core.services.endpoint_selector."""
from __future__ import annotations

import json

import pytest

from core.errors import MalformedConfig
from core.services.endpoint_selector import parse_endpoint_map, select_endpoint

_RAW = '{"Endpoints":[{"environment":"E1","endpoint":"https://a"},{"environment":"E2","endpoint":"https://b"}]}'


class TestSelectEndpoint:
    def test_selects_matching_environment(self) -> None:
        assert select_endpoint(_RAW, "E2") == "https://b"

    def test_no_match_returns_none(self) -> None:
        assert select_endpoint(_RAW, "E3") is None

    def test_match_is_case_sensitive(self) -> None:
        assert select_endpoint(_RAW, "e1") is None

    def test_first_duplicate_wins(self) -> None:
        raw = json.dumps(
            {
                "Endpoints": [
                    {"environment": "E1", "endpoint": "https://first"},
                    {"environment": "E1", "endpoint": "https://second"},
                ]
            }
        )
        assert select_endpoint(raw, "E1") == "https://first"

    def test_empty_list_is_no_match(self) -> None:
        assert select_endpoint('{"Endpoints": []}', "E1") is None

    def test_extra_fields_are_ignored(self) -> None:
        raw = '{"Version": 2, "Endpoints": [{"environment": "E1", "endpoint": "https://a", "note": "x"}]}'
        assert select_endpoint(raw, "E1") == "https://a"


class TestMalformed:
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "{",
            "[]",
            "{}",
            '{"Endpoints": {"environment": "E1"}}',
            '{"Endpoints": [{"environment": "E1"}]}',
            '{"Endpoints": [{"endpoint": "https://a"}]}',
            '{"endpoints": []}',
        ],
    )
    def test_malformed_raises(self, raw: str) -> None:
        with pytest.raises(MalformedConfig):
            select_endpoint(raw, "E1")

    def test_reason_names_location(self) -> None:
        with pytest.raises(MalformedConfig) as info:
            parse_endpoint_map("{}")
        assert "Endpoints" in info.value.reason

    def test_parse_keeps_order(self) -> None:
        parsed = parse_endpoint_map(_RAW)
        assert [e.environment for e in parsed.endpoints] == ["E1", "E2"]
