"""Dispatch único (single-shot) contra el endpoint resuelto.

Reglas:
- POST con JSON, siguiendo redirects (lo hace el transporte).
- 2xx -> `Success`; otro status -> `Failure`; excepción de red -> `TransportFailure`.
- Sin reintentos ni backoff.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from core.domain.models import Failure, RequestOutcome, Success, TransportFailure
from core.errors import RequestFailed, TransportError
from core.interfaces.transport import Transport

logger = structlog.get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class RequestDispatcher:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def dispatch(self, endpoint: str, payload: Any) -> RequestOutcome:
        body = json.dumps(payload).encode("utf-8")
        try:
            response = await self._transport.send(
                endpoint,
                method="POST",
                headers=JSON_HEADERS,
                body=body,
            )
        except (httpx.TransportError, OSError) as exc:
            logger.debug("dispatch_transport_error", endpoint=endpoint, error=str(exc))
            return TransportFailure(cause=exc)

        if response.is_success:
            logger.debug("dispatch_succeeded", endpoint=endpoint, status_code=response.status_code)
            return Success(response=response)

        logger.debug("dispatch_failed", endpoint=endpoint, status_code=response.status_code)
        return Failure(status_code=response.status_code, status_text=response.reason_phrase)


def raise_for_outcome(outcome: RequestOutcome, endpoint: str) -> Success:
    """Convierte un resultado no exitoso en su error tipado."""

    if isinstance(outcome, Success):
        return outcome
    if isinstance(outcome, Failure):
        raise RequestFailed(endpoint, outcome.status_code, outcome.status_text)
    raise TransportError(endpoint, outcome.cause) from outcome.cause
