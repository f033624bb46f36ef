"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.dataverse import DataverseRecordStore
from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file
from core.domain.models import SCHEMAS
from core.errors import EnvRouteError
from core.services.config_resolver import ConfigResolver
from core.services.endpoint_selector import parse_endpoint_map

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str) -> tuple[bool, str]:
    try:
        async with build_async_client() as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


async def _check_config(settings: AppSettings) -> tuple[bool, str]:
    """Resolve and decode the configured endpoint map against the record store."""

    try:
        resolver = ConfigResolver(DataverseRecordStore(settings), SCHEMAS[settings.record_schema])
        value = await resolver.resolve(settings.config_name)
        endpoint_map = parse_endpoint_map(value.raw_text)
    except (EnvRouteError, ValueError) as exc:
        return False, f"{type(exc).__name__}: {exc}"
    return True, f"{len(endpoint_map.endpoints)} endpoint(s)"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="envroute Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Config name", "OK", settings.config_name)

    current = settings.resolve_current_environment()
    table.add_row("Current environment", "OK" if current else "MISSING", current or "set ENVROUTE_CURRENT_ENVIRONMENT")

    if not settings.record_store_url:
        table.add_row("Record store", "MISSING", "set ENVROUTE_RECORD_STORE_URL or run `envroute setup`")
        _console.print(table)
        return

    table.add_row("Record store", "OK", settings.record_store_url)
    if bool(settings.record_store_token):
        table.add_row("Token", "OK", "Bearer token set")
    else:
        table.add_row("Token", "OPTIONAL", "No token set -> anonymous requests")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.record_store_url))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    ok_cfg, detail_cfg = asyncio.run(_check_config(settings))
    table.add_row("Endpoint map", "OK" if ok_cfg else "FAIL", detail_cfg)

    _console.print(table)
