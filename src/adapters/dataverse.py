"""Record store: Dataverse Web API.

Implementación:
- `GET {org}/api/data/v{version}/{entity_set}?$select=..&$filter=..`
- Los registros vienen en la clave `value` del JSON de respuesta.
- Errores HTTP se lanzan (`raise_for_status`); el resolver los envuelve
  como `RecordStoreError` con tabla y filtro.

Notas:
- `table` es el nombre del entity set (p.ej. `environmentvariabledefinitions`).
- El token bearer se obtiene fuera (az cli, MSAL, etc.) y llega por config.
"""

from __future__ import annotations

from typing import Any, Sequence

import httpx
import structlog

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.query import odata_params

logger = structlog.get_logger(__name__)

_ODATA_HEADERS = {
    "OData-MaxVersion": "4.0",
    "OData-Version": "4.0",
}


class DataverseRecordStore:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        if not self._settings.record_store_url:
            raise ValueError("record_store_url is required for the Dataverse record store")
        self._client = client

    @property
    def api_root(self) -> str:
        base = str(self._settings.record_store_url).rstrip("/")
        return f"{base}/api/data/v{self._settings.record_store_api_version}"

    def _headers(self) -> dict[str, str]:
        headers = dict(_ODATA_HEADERS)
        if self._settings.record_store_token:
            headers["Authorization"] = f"Bearer {self._settings.record_store_token}"
        return headers

    async def query(
        self,
        table: str,
        filter_expression: str,
        select: Sequence[str],
    ) -> list[dict[str, Any]]:
        url = f"{self.api_root}/{table}"
        params = odata_params(select, filter_expression)
        logger.debug("record_store_query", table=table, filter=filter_expression)

        if self._client is not None:
            resp = await self._client.get(url, params=params, headers=self._headers())
        else:
            async with build_async_client(self._settings, extra_headers=self._headers()) as client:
                resp = await client.get(url, params=params)

        resp.raise_for_status()
        data = resp.json()
        records = data.get("value") if isinstance(data, dict) else None
        if not isinstance(records, list):
            raise ValueError(f'unexpected Web API payload for "{table}": missing "value" list')
        return [r for r in records if isinstance(r, dict)]
