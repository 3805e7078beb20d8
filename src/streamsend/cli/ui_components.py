"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from streamsend.adapters.api import Audience, Subscriber
from streamsend.core.domain.errors import ApiError, SemanticError, StreamSendError


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("StreamSend", style="bold cyan")
    subtitle = Text("Audiences • Subscribers", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _fmt(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def build_subscribers_table(subscribers: Iterable[Subscriber]) -> Table:
    table = Table(title="Subscribers")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Email", style="white")
    table.add_column("Status", style="green")
    table.add_column("Created", style="dim")
    for subscriber in subscribers:
        table.add_row(
            _fmt(subscriber.id),
            _fmt(subscriber.get("email_address")),
            _fmt(subscriber.opt_status),
            _fmt(subscriber.get("created_at")),
        )
    return table


def build_audiences_table(audiences: Iterable[Audience]) -> Table:
    table = Table(title="Audiences")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    for audience in audiences:
        table.add_row(_fmt(audience.id), _fmt(audience.name))
    return table


def build_subscriber_panel(subscriber: Subscriber) -> Panel:
    """Panel con todos los campos de un subscriber (`show`)."""

    body = Text()
    for name, value in subscriber.record.items():
        body.append(f"{name}: ", style="bold")
        body.append(f"{_fmt(value)}\n")
    title = Text(f"Subscriber {subscriber.id}", style="bold yellow")
    return Panel(body, title=title, border_style="yellow")


def print_error(console: Console, error: StreamSendError) -> None:
    """Muestra un error de la librería; los 422 listan cada mensaje."""

    if isinstance(error, SemanticError):
        console.print("[red]Validation failed:[/red]")
        for message in error.errors:
            console.print(f"  - {message}")
        return
    if isinstance(error, ApiError) and error.status is not None:
        console.print(f"[red]{error.kind.value}[/red] (HTTP {error.status}): {error.message}")
        return
    console.print(f"[red]Error:[/red] {error}")
