"""CLI `streamsend` (Typer + Rich).

Por qué una CLI delgada:
- Toda la lógica vive en `adapters.api`; aquí solo se parsean argumentos y se
  pinta el resultado.
- Los errores de la librería se muestran en rojo y terminan con exit code 1.
"""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

import typer
from rich.console import Console

from streamsend.adapters.api import Audience, Subscriber
from streamsend.cli import doctor
from streamsend.cli.ui_components import (
    build_audiences_table,
    build_subscriber_panel,
    build_subscribers_table,
    print_banner,
    print_error,
)
from streamsend.core.domain.errors import StreamSendError

app = typer.Typer(no_args_is_help=True, help="StreamSend audiences and subscribers.")
app.add_typer(doctor.app, name="doctor")

console = Console()

AudienceOption = typer.Option(None, "--audience-id", "-a", help="Audience ID (default: first audience).")
RequiredAudienceOption = typer.Option(..., "--audience-id", "-a", help="Audience ID of the subscriber.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    banner: bool = typer.Option(False, "--banner", help="Print the banner before running."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if banner:
        print_banner(console)


def _fail(error: StreamSendError) -> NoReturn:
    print_error(console, error)
    raise typer.Exit(code=1)


@app.command()
def audiences() -> None:
    """List the account audiences."""

    try:
        items = Audience.index()
    except StreamSendError as exc:
        _fail(exc)
    console.print(build_audiences_table(items))


@app.command()
def subscribers(audience_id: Optional[int] = AudienceOption) -> None:
    """List subscribers of an audience."""

    try:
        items = Subscriber.index(audience_id)
    except StreamSendError as exc:
        _fail(exc)
    console.print(build_subscribers_table(items))


@app.command()
def find(email_address: str, audience_id: Optional[int] = AudienceOption) -> None:
    """Find a subscriber by email address."""

    try:
        subscriber = Subscriber.find(email_address, audience_id)
    except StreamSendError as exc:
        _fail(exc)
    console.print(build_subscriber_panel(subscriber))


@app.command()
def show(subscriber_id: int, audience_id: int = RequiredAudienceOption) -> None:
    """Show every field of a subscriber."""

    try:
        subscriber = Subscriber({"id": subscriber_id, "audience_id": audience_id}).show()
    except StreamSendError as exc:
        _fail(exc)
    console.print(build_subscriber_panel(subscriber))


@app.command()
def create(
    email_address: str,
    first_name: Optional[str] = typer.Option(None, "--first-name"),
    last_name: Optional[str] = typer.Option(None, "--last-name"),
    audience_id: Optional[int] = AudienceOption,
) -> None:
    """Create a subscriber and print its id."""

    attributes = {"email_address": email_address}
    if first_name:
        attributes["first_name"] = first_name
    if last_name:
        attributes["last_name"] = last_name

    try:
        subscriber_id = Subscriber.create(attributes, audience_id)
    except StreamSendError as exc:
        _fail(exc)
    console.print(f"[green]Created subscriber[/green] {subscriber_id}")


def _run_action(subscriber_id: int, audience_id: int, action: str) -> None:
    subscriber = Subscriber({"id": subscriber_id, "audience_id": audience_id})
    try:
        getattr(subscriber, action)()
    except StreamSendError as exc:
        _fail(exc)
    console.print(f"[green]{action.capitalize()} OK[/green] subscriber {subscriber_id}")


@app.command()
def activate(subscriber_id: int, audience_id: int = RequiredAudienceOption) -> None:
    """Activate a subscriber."""

    _run_action(subscriber_id, audience_id, "activate")


@app.command()
def unsubscribe(subscriber_id: int, audience_id: int = RequiredAudienceOption) -> None:
    """Unsubscribe a subscriber."""

    _run_action(subscriber_id, audience_id, "unsubscribe")


@app.command()
def destroy(subscriber_id: int, audience_id: int = RequiredAudienceOption) -> None:
    """Delete a subscriber."""

    _run_action(subscriber_id, audience_id, "destroy")


def run() -> None:
    app()
