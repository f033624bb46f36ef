"""Unit tests for core.services.dispatcher."""
from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from conftest import mock_transport
from core.domain.models import Failure, Success, TransportFailure
from core.errors import RequestFailed, TransportError
from core.services.dispatcher import RequestDispatcher, raise_for_outcome

_URL = "https://a.example/hook"


def _dispatch(handler, payload=None):
    transport, seen = mock_transport(handler)
    outcome = asyncio.run(RequestDispatcher(transport).dispatch(_URL, payload or {"id": "123"}))
    return outcome, seen


class TestRequestShape:
    def test_posts_json_body(self) -> None:
        _, seen = _dispatch(lambda request: httpx.Response(200))
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == _URL
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"id": "123"}

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/hook":
                return httpx.Response(307, headers={"Location": "https://a.example/moved"})
            return httpx.Response(200, json={"moved": True})

        outcome, seen = _dispatch(handler)
        assert isinstance(outcome, Success)
        assert [r.url.path for r in seen] == ["/hook", "/moved"]


class TestClassification:
    def test_2xx_is_success(self) -> None:
        outcome, _ = _dispatch(lambda request: httpx.Response(202, json={"queued": True}))
        assert isinstance(outcome, Success)
        assert outcome.kind == "success"
        assert outcome.response.status_code == 202
        assert outcome.response.json() == {"queued": True}

    @pytest.mark.parametrize(("status", "reason"), [(404, "Not Found"), (500, "Internal Server Error")])
    def test_non_2xx_is_failure(self, status: int, reason: str) -> None:
        outcome, seen = _dispatch(lambda request: httpx.Response(status))
        assert outcome == Failure(status_code=status, status_text=reason)
        assert len(seen) == 1

    def test_network_error_is_transport_failure(self) -> None:
        boom = httpx.ConnectError("name resolution failed")

        def handler(request: httpx.Request) -> httpx.Response:
            raise boom

        outcome, seen = _dispatch(handler)
        assert isinstance(outcome, TransportFailure)
        assert outcome.cause is boom
        assert len(seen) == 1


class TestRaiseForOutcome:
    def test_success_passes_through(self) -> None:
        success = Success(response=httpx.Response(200))
        assert raise_for_outcome(success, _URL) is success

    def test_failure_raises_request_failed(self) -> None:
        with pytest.raises(RequestFailed) as info:
            raise_for_outcome(Failure(status_code=500, status_text="Internal Server Error"), _URL)
        assert info.value.status_code == 500
        assert info.value.status_text == "Internal Server Error"
        assert info.value.endpoint == _URL

    def test_transport_failure_raises_transport_error(self) -> None:
        cause = httpx.ConnectTimeout("timed out")
        with pytest.raises(TransportError) as info:
            raise_for_outcome(TransportFailure(cause=cause), _URL)
        assert info.value.__cause__ is cause
        assert info.value.endpoint == _URL
