"""CLI principal (Typer).

Comandos:
- `run <id>`: resuelve el endpoint del entorno actual y le envía `{"id": ...}`.
- `resolve`: muestra el mapa de endpoints y el endpoint seleccionado.
- `setup`: guarda la conexión al record store en el .env del usuario.
- `doctor`: diagnósticos de configuración/conectividad.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from adapters.dataverse import DataverseRecordStore
from adapters.host import RichProgressSink, StaticEnvironment
from adapters.http_client import HttpxTransport
from adapters.memory_store import InMemoryRecordStore
from cli import doctor
from cli.ui_components import build_endpoints_table, build_result_panel, print_banner
from core.config import AppSettings, write_user_env_vars
from core.domain.models import DEFAULT_SCHEMA, SCHEMAS
from core.errors import EnvRouteError
from core.log import configure_logging
from core.services.config_resolver import ConfigResolver
from core.services.dispatcher import RequestDispatcher
from core.services.endpoint_action import EndpointAction
from core.services.endpoint_selector import parse_endpoint_map, select_endpoint

app = typer.Typer(no_args_is_help=True, help="Environment-aware endpoint resolution and dispatch.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

_RecordsFileOption = typer.Option(
    None,
    "--records-file",
    exists=True,
    dir_okay=False,
    help="JSON fixture with definition/value records (offline mode).",
)


def _build_resolver(settings: AppSettings, records_file: Path | None) -> ConfigResolver:
    if records_file is not None:
        # Los fixtures usan los nombres neutrales de tabla/campo.
        return ConfigResolver(InMemoryRecordStore.from_file(records_file), DEFAULT_SCHEMA)
    return ConfigResolver(DataverseRecordStore(settings), SCHEMAS[settings.record_schema])


def _environment(settings: AppSettings, override: str | None) -> StaticEnvironment:
    current = override or settings.resolve_current_environment()
    if not current:
        raise typer.BadParameter(
            "current environment unknown: pass --environment or set ENVROUTE_CURRENT_ENVIRONMENT"
        )
    return StaticEnvironment(current)


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Override ENVROUTE_LOG_LEVEL."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit JSON logs."),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level, json=log_json or settings.log_json)


@app.command(name="run")
def run_command(
    record_id: str = typer.Argument(..., help="Record id (GUID, braces allowed)."),
    config_name: str | None = typer.Option(None, "--config-name", help="Definition display name."),
    environment: str | None = typer.Option(None, "--environment", help="Current environment id (base URL)."),
    records_file: Path | None = _RecordsFileOption,
    banner: bool = typer.Option(True, "--banner/--no-banner"),
) -> None:
    """Resolve the endpoint for the current environment and POST the id to it."""

    settings = AppSettings()
    if banner:
        print_banner(_console)

    try:
        resolver = _build_resolver(settings, records_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    action = EndpointAction(
        resolver=resolver,
        dispatcher=RequestDispatcher(HttpxTransport(settings)),
        environment=_environment(settings, environment),
        sink=RichProgressSink(),
        config_name=config_name or settings.config_name,
        busy_message=settings.busy_message,
    )
    result = asyncio.run(action.run(record_id))
    _console.print(build_result_panel(result))
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def resolve(
    config_name: str | None = typer.Option(None, "--config-name", help="Definition display name."),
    environment: str | None = typer.Option(None, "--environment", help="Current environment id (base URL)."),
    records_file: Path | None = _RecordsFileOption,
) -> None:
    """Show the configured endpoint map and the endpoint selected for this environment."""

    settings = AppSettings()
    name = config_name or settings.config_name
    env = _environment(settings, environment)

    try:
        resolver = _build_resolver(settings, records_file)
        value = asyncio.run(resolver.resolve(name))
        endpoint_map = parse_endpoint_map(value.raw_text)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except EnvRouteError as exc:
        _console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    current = env.current_environment()
    entries = [(e.environment, e.endpoint) for e in endpoint_map.endpoints]
    _console.print(build_endpoints_table(entries, current))

    selected = select_endpoint(value.raw_text, current)
    if selected is None:
        _console.print(f'[yellow]No endpoint for environment "{current}".[/yellow]')
        raise typer.Exit(code=1)
    _console.print(f"[green]Selected:[/green] {selected}")


@app.command()
def setup() -> None:
    """Interactive setup (stores the record store connection in the user config .env)."""

    url = typer.prompt("Organization URL (e.g. https://org.crm.dynamics.com)").strip()
    token = typer.prompt("Bearer token", hide_input=True, default="", show_default=False).strip()
    environment = typer.prompt("Current environment id", default=url, show_default=True).strip()
    config_name = typer.prompt(
        "Configuration name",
        default=AppSettings().config_name,
        show_default=True,
    ).strip()

    if not url.startswith(("http://", "https://")):
        raise typer.BadParameter("organization URL must start with http:// or https://")

    values = {
        "ENVROUTE_RECORD_STORE_URL": url,
        "ENVROUTE_CURRENT_ENVIRONMENT": environment,
        "ENVROUTE_CONFIG_NAME": config_name,
    }
    if token:
        values["ENVROUTE_RECORD_STORE_TOKEN"] = token

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
