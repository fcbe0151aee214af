"""Helpers shared by the CLI commands."""

import sqlite3
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, NoReturn, TypeVar

from rich.console import Console

from spent.api import Result, SpentApi
from spent.config import load_settings, resolve_db_path
from spent.domain.models import Money
from spent.domain.transactions import format_money_display

console = Console()

T = TypeVar("T")


def fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


@contextmanager
def open_api() -> Iterator[tuple[SpentApi, dict[str, Any]]]:
    """Open the ledger using the configured database path.

    The connection is closed when the block exits, including through fail().
    """
    settings = load_settings()
    try:
        api = SpentApi.open(resolve_db_path(settings))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Filesystem error: {e}")

    try:
        yield api, settings
    finally:
        api.close()


def unwrap(result: Result[T]) -> T:
    """Return the value of a command result or exit with its error."""
    value, error = result
    if error is not None:
        fail(error)
    return value  # type: ignore[return-value]


def resolve_container(api: SpentApi, ref: str | None) -> dict[str, Any]:
    """Find a container by name or id; the default one when ref is None."""
    containers = unwrap(api.get_containers())

    if ref is None:
        return containers[0]

    for container in containers:
        if container["name"] == ref:
            return container
    if ref.isdigit():
        for container in containers:
            if container["id"] == int(ref):
                return container

    fail(f"Container '{ref}' not found")


def money(amount: int, settings: dict[str, Any], colour: bool = True) -> str:
    """Format cents with the configured currency, red for expenses."""
    currency = settings["currency"]
    text = format_money_display(Money(amount), currency["symbol"], currency["position"])
    if not colour:
        return text
    return f"[red]{text}[/red]" if amount < 0 else f"[green]{text}[/green]"
