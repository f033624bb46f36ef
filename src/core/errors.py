"""Errores tipados del Core.

Cada fallo tiene su propia clase con contexto estructurado (tabla, status,
causa) en vez de mensajes libres. Ningún componente del Core los recupera:
se propagan hasta el orquestador, que es el único punto que los registra.
"""

from __future__ import annotations


class EnvRouteError(Exception):
    """Base de todos los errores de resolución/dispatch."""


class ConfigNotFound(EnvRouteError):
    """La definición no existe o es ambigua (filas != 1)."""

    def __init__(self, name: str, count: int) -> None:
        self.name = name
        self.count = count
        reason = "not found" if count == 0 else f"ambiguous ({count} definitions)"
        super().__init__(f'Configuration "{name}" {reason}.')


class ConfigValueMissing(EnvRouteError):
    """La definición existe pero su valor falta, está duplicado o vacío."""

    def __init__(self, name: str, definition_id: str, count: int) -> None:
        self.name = name
        self.definition_id = definition_id
        self.count = count
        super().__init__(
            f'Configuration "{name}" has {count} value record(s) for definition {definition_id}; '
            "exactly one non-empty value is required."
        )


class MalformedConfig(EnvRouteError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed endpoint configuration: {reason}")


class NoEndpointForEnvironment(EnvRouteError):
    def __init__(self, name: str, environment: str) -> None:
        self.name = name
        self.environment = environment
        super().__init__(f'No endpoint configured in "{name}" for environment "{environment}".')


class RecordStoreError(EnvRouteError):
    """Falla de la consulta subyacente. La causa queda en `__cause__`."""

    def __init__(self, table: str, filter_expression: str, name: str) -> None:
        self.table = table
        self.filter_expression = filter_expression
        self.name = name
        super().__init__(
            f'Error retrieving records from table "{table}" '
            f'(filter: {filter_expression}) while resolving "{name}".'
        )


class TransportError(EnvRouteError):
    """Fallo de red antes de obtener respuesta. La causa queda en `__cause__`."""

    def __init__(self, endpoint: str, cause: BaseException | None = None) -> None:
        self.endpoint = endpoint
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Transport error calling {endpoint}{detail}")


class RequestFailed(EnvRouteError):
    def __init__(self, endpoint: str, status_code: int, status_text: str) -> None:
        self.endpoint = endpoint
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(f"Request failed with status {status_code}: {status_text}")


class InvalidIdentifier(EnvRouteError):
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid identifier: {value!r}")
