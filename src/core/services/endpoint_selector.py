"""Selección del endpoint para el entorno actual.

Funciones puras: sin I/O, sin estado, deterministas.
"""

from __future__ import annotations

from pydantic import ValidationError

from core.domain.models import EndpointMap
from core.errors import MalformedConfig


def parse_endpoint_map(raw_text: str) -> EndpointMap:
    """Decodifica `{"Endpoints": [...]}`; cualquier desvío es `MalformedConfig`."""

    try:
        return EndpointMap.model_validate_json(raw_text)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
        raise MalformedConfig(f"{location}: {first.get('msg')}") from exc


def select_endpoint(raw_text: str, current_environment: str) -> str | None:
    """Endpoint de la primera entrada cuyo `environment` coincide exactamente.

    Devuelve `None` si ninguna coincide; decidir si eso es fatal es cosa del caller.
    """

    endpoint_map = parse_endpoint_map(raw_text)
    for entry in endpoint_map.endpoints:
        if entry.environment == current_environment:
            return entry.endpoint
    return None
