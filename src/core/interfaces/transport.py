"""Contrato del transporte HTTP usado por el dispatcher."""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

import httpx


@runtime_checkable
class Transport(Protocol):
    """Envía una petición y devuelve la respuesta tal cual.

    Las respuestas no-2xx no son excepciones: se devuelven y el dispatcher
    las clasifica. Los fallos de red sí se lanzan.
    """

    async def send(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> httpx.Response:
        ...
