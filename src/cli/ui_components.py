"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ActionResult, Failure, Success, TransportFailure


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("envroute", style="bold cyan")
    subtitle = Text("Environment-aware endpoint resolution • Dispatch", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_endpoints_table(entries: list[tuple[str, str]], current: str | None = None) -> Table:
    """Tabla entorno -> endpoint, marcando el entorno actual."""

    table = Table(title="Endpoints")
    table.add_column("Environment", style="cyan", no_wrap=True)
    table.add_column("Endpoint", style="magenta")
    table.add_column("Current", style="green")
    for environment, endpoint in entries:
        table.add_row(environment, endpoint, "yes" if environment == current else "")
    return table


def build_result_panel(result: ActionResult) -> Panel:
    """Panel con el resultado de la acción (endpoint + outcome/error)."""

    body = Text()
    body.append("Endpoint: ", style="bold")
    body.append(f"{result.endpoint or '-'}\n")

    outcome = result.outcome
    if isinstance(outcome, Success):
        body.append(f"HTTP {outcome.response.status_code} {outcome.response.reason_phrase}", style="green")
    elif isinstance(outcome, Failure):
        body.append(f"HTTP {outcome.status_code} {outcome.status_text}", style="red")
    elif isinstance(outcome, TransportFailure):
        body.append(f"Transport error: {outcome.cause}", style="red")

    if result.error is not None:
        body.append(f"\n{type(result.error).__name__}: {result.error}", style="red")

    style = "green" if result.ok else "red"
    title = Text("Request succeeded" if result.ok else "Request failed", style=f"bold {style}")
    return Panel(body, title=title, border_style=style)
