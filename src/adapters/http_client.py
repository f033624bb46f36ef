"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects para el dispatcher y el record store.
- Facilita testeo: se puede inyectar un `httpx.AsyncClient` con `MockTransport`.
"""

from __future__ import annotations

from typing import Mapping

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `follow_redirects=True` replica el `redirect: "follow"` del host.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxTransport:
    """`core.interfaces.transport.Transport` sobre httpx.

    Si no se inyecta un cliente, abre uno por petición (sin estado compartido
    entre invocaciones).
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    async def send(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(method, url, headers=dict(headers), content=body)

        async with build_async_client(self._settings) as client:
            return await client.request(method, url, headers=dict(headers), content=body)
