"""Flask CLI commands for inspecting and resetting the JSON document."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from chirpy.core.extensions import get_store
from chirpy.services._shared.errors import StorageError

LOGGER = logging.getLogger(__name__)


def _echo_counts(counts: dict[str, int]) -> None:
    width = max(len(name) for name in counts)
    for name, total in sorted(counts.items()):
        click.echo(f"  {name.ljust(width)}  records={total:>4}")


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    if not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError(
            "The 'flask db reset' command is restricted to debug or testing environments."
        )


@click.group("db")
def db_cli() -> None:
    """Commands operating on the JSON document store."""


@db_cli.command("stats")
@with_appcontext
def stats_command() -> None:
    """Print the record count of every collection."""
    store = get_store()
    try:
        counts = store.stats()
    except StorageError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Document: {store.path}")
    _echo_counts(counts)


@db_cli.command("reset")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def reset_command(yes: bool) -> None:
    """Discard every record and rewind the id counters."""
    _ensure_non_production()
    if not yes:
        click.confirm("This will DELETE every stored record. Continue?", abort=True)
    store = get_store()
    LOGGER.info("Resetting document %s", store.path)
    try:
        store.reset()
    except StorageError as exc:
        raise click.ClickException(f"Reset failed: {exc}") from exc
    click.echo("Document reset.")
    _echo_counts(store.stats())
