"""Endpoint action orchestration.

One user-triggered action: resolve the configured endpoint map, pick the
endpoint for the current environment and POST the record id to it. This is
the single place that reports failures to the sink; the services underneath
only raise. The busy indicator is shown once and always cleared, whatever happens.
"""

from __future__ import annotations

import structlog

from core.domain.models import ActionResult
from core.errors import EnvRouteError, NoEndpointForEnvironment
from core.identifiers import normalize_identifier
from core.interfaces.host import EnvironmentContext, ProgressSink
from core.services.config_resolver import ConfigResolver
from core.services.dispatcher import RequestDispatcher, raise_for_outcome
from core.services.endpoint_selector import select_endpoint

logger = structlog.get_logger(__name__)

DEFAULT_BUSY_MESSAGE = "Processing your request..."


class EndpointAction:
    def __init__(
        self,
        *,
        resolver: ConfigResolver,
        dispatcher: RequestDispatcher,
        environment: EnvironmentContext,
        sink: ProgressSink,
        config_name: str,
        busy_message: str = DEFAULT_BUSY_MESSAGE,
    ) -> None:
        self._resolver = resolver
        self._dispatcher = dispatcher
        self._environment = environment
        self._sink = sink
        self._config_name = config_name
        self._busy_message = busy_message

    async def resolve_endpoint(self) -> str:
        """Resolve the endpoint for the current environment or raise."""

        value = await self._resolver.resolve(self._config_name)
        current = self._environment.current_environment()
        endpoint = select_endpoint(value.raw_text, current)
        if not endpoint:
            raise NoEndpointForEnvironment(self._config_name, current)
        logger.info("endpoint_resolved", name=self._config_name, environment=current, endpoint=endpoint)
        return endpoint

    async def run(self, record_id: object) -> ActionResult:
        result = ActionResult()
        self._sink.show_busy(self._busy_message)
        try:
            payload = {"id": normalize_identifier(record_id)}
            result.endpoint = await self.resolve_endpoint()
            result.outcome = await self._dispatcher.dispatch(result.endpoint, payload)
            success = raise_for_outcome(result.outcome, result.endpoint)
            logger.info(
                "request_succeeded",
                endpoint=result.endpoint,
                status_code=success.response.status_code,
            )
        except EnvRouteError as exc:
            result.error = exc
            self._sink.log_error("Endpoint action error", exc)
        except Exception as exc:
            self._sink.log_error("Unexpected endpoint action error", exc)
            raise
        finally:
            self._sink.clear_busy()
        return result
