"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from streamsend.adapters.api import ApiContext
from streamsend.core.config import AppSettings, write_user_env_vars
from streamsend.core.domain.errors import StreamSendError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        context = ApiContext.from_settings(settings)
        audience_id = context.audience_id()
    except StreamSendError as exc:
        return False, str(exc)
    return True, f"current audience id {audience_id}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="StreamSend Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.has_credentials:
        table.add_row("Credentials", "OK", f"username {settings.username}")
    else:
        table.add_row("Credentials", "MISSING", "Run `streamsend doctor setup`")
    table.add_row("Host", "OK", f"{settings.scheme}://{settings.host}")

    # Connectivity
    if settings.has_credentials:
        ok_api, detail_api = _check_api(settings)
        table.add_row("API /audiences.xml", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)


@app.command()
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    settings = AppSettings()

    username = typer.prompt("StreamSend login ID", default=settings.username or "", show_default=True).strip()
    password = typer.prompt("StreamSend API key", hide_input=True, confirmation_prompt=False).strip()
    host = typer.prompt("API host", default=settings.host, show_default=True).strip()

    if not username or not password:
        raise typer.BadParameter("login ID and API key are required")

    env_path = write_user_env_vars(
        {
            "STREAMSEND_USERNAME": username,
            "STREAMSEND_PASSWORD": password,
            "STREAMSEND_HOST": host,
        }
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
