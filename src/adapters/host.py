"""Adaptadores del host para CLI: entorno fijo + spinner Rich.

Por qué aquí:
- El Core solo conoce `EnvironmentContext` / `ProgressSink`.
- La CLI decide cómo se ve el "ocupado" (Rich status) y dónde van los errores
  (structlog).
"""

from __future__ import annotations

import structlog
from rich.console import Console
from rich.status import Status

logger = structlog.get_logger(__name__)


class StaticEnvironment:
    """Entorno conocido de antemano (flag, env var o URL de la organización)."""

    def __init__(self, environment: str) -> None:
        self._environment = environment

    def current_environment(self) -> str:
        return self._environment


class RichProgressSink:
    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._status: Status | None = None

    def show_busy(self, message: str) -> None:
        self._status = self._console.status(message, spinner="dots")
        self._status.start()

    def clear_busy(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def log_error(self, context: str, error: BaseException) -> None:
        logger.error(
            "action_failed",
            context=context,
            error_type=type(error).__name__,
            error=str(error),
            exc_info=error,
        )
