"""Contratos del host: entorno actual e indicador de progreso/logging."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EnvironmentContext(Protocol):
    def current_environment(self) -> str:
        """Identificador del entorno de ejecución actual (p.ej. URL base)."""

        ...


@runtime_checkable
class ProgressSink(Protocol):
    """Indicador de ocupado + reporte de errores (fire-and-forget)."""

    def show_busy(self, message: str) -> None:
        ...

    def clear_busy(self) -> None:
        ...

    def log_error(self, context: str, error: BaseException) -> None:
        ...
