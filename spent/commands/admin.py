"""Admin commands: initialization, containers and categories."""

import sqlite3
import sys

import typer
from rich.table import Table

from spent.commands.common import console, fail, open_api, unwrap
from spent.config import create_default_config, get_config_path, load_settings, resolve_db_path
from spent.store import Database, get_db_path


def init_command(force: bool = False) -> None:
    """Create the database and a default config file.

    Running it against an existing database only applies pending
    migrations; an existing config is kept unless force is set.
    """
    config_path = get_config_path()
    db_path = resolve_db_path(load_settings()) or get_db_path()

    try:
        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        Database.open(db_path).close()
        console.print("[green]✓[/green] Database ready")

        if config_path.exists() and not force:
            console.print(f"[dim]Config already exists: {config_path}[/dim]")
            console.print("[yellow]Use 'spent init --force' to overwrite it[/yellow]")
        else:
            create_default_config(config_path)
            console.print(f"[green]✓[/green] Config file created at {config_path} (permissions: 600)")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def container_list_command() -> None:
    """List containers."""
    with open_api() as (api, _):
        containers = unwrap(api.get_containers())

    table = Table(title="Containers")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Created", style="white")
    table.add_column("Default", justify="center")

    for container in containers:
        table.add_row(
            str(container["id"]),
            container["name"],
            container["created_at"],
            "★" if container["is_default"] else "",
        )

    console.print(table)


def container_add_command(name: str) -> None:
    """Create a container."""
    with open_api() as (api, _):
        container = unwrap(api.add_container(name))
    console.print(f"[green]✓[/green] Created container '{container['name']}' (ID: {container['id']})")


def container_rename_command(container_id: int, name: str) -> None:
    """Rename a container."""
    with open_api() as (api, _):
        container = unwrap(api.update_container(container_id, name))
    console.print(f"[green]✓[/green] Container {container['id']} renamed to '{container['name']}'")


def container_delete_command(container_id: int, yes: bool = False) -> None:
    """Delete a container and every transaction in it."""
    if not yes and not typer.confirm(
        f"Delete container {container_id} and all of its transactions? This cannot be undone", default=False
    ):
        fail("Aborted")

    with open_api() as (api, _):
        unwrap(api.delete_container(container_id))
    console.print(f"[green]✓[/green] Deleted container {container_id}")


def category_list_command() -> None:
    """List categories, marking the built-in ones."""
    with open_api() as (api, _):
        categories = unwrap(api.get_category_records())

    for category in categories:
        marker = " [dim](default)[/dim]" if category["is_default"] else ""
        console.print(f"  • {category['name']}{marker}")


def category_add_command(name: str) -> None:
    """Add a category."""
    with open_api() as (api, _):
        unwrap(api.add_category(name))
    console.print(f"[green]✓[/green] Added category '{name}'")


def category_delete_command(name: str) -> None:
    """Delete a user category. Built-in categories are left alone."""
    with open_api() as (api, _):
        before = set(unwrap(api.get_categories()))
        unwrap(api.delete_category(name))
        after = set(unwrap(api.get_categories()))

    if name in after:
        console.print(f"[yellow]'{name}' is a default category and was not deleted[/yellow]")
    elif name in before:
        console.print(f"[green]✓[/green] Deleted category '{name}'")
    else:
        console.print(f"[yellow]Category '{name}' not found[/yellow]")
