"""CLI entry point for spent."""

import typer

from spent.commands.admin import (
    category_add_command,
    category_delete_command,
    category_list_command,
    container_add_command,
    container_delete_command,
    container_list_command,
    container_rename_command,
    init_command,
)
from spent.commands.report import balance_command, months_command, totals_command
from spent.commands.transactions import (
    add_command,
    delete_command,
    export_command,
    import_command,
    list_command,
    update_command,
)
from spent.log import configure_logging, resolve_level

CONTAINER_HELP = "Container name or ID (default: the default container)"

app = typer.Typer(
    name="spent",
    help="spent - A personal finance ledger",
    add_completion=False,
)
container_app = typer.Typer(help="Manage containers (separate ledgers).")
category_app = typer.Typer(help="Manage categories.")
app.add_typer(container_app, name="container")
app.add_typer(category_app, name="category")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """spent - A personal finance ledger."""
    configure_logging(resolve_level(verbose))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize the spent database and configuration."""
    init_command(force)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount (e.g. 12.50 or $1,200)"),
    description: str = typer.Option(None, "--description", "-d", help="Description (default: Untitled)"),
    category: str = typer.Option(None, "--category", "-c", help="Category (default: Other)"),
    expense: bool = typer.Option(False, "--expense", "-e", help="Record as an expense"),
    container: str = typer.Option(None, "--container", help=CONTAINER_HELP),
) -> None:
    """Add a transaction dated now."""
    add_command(amount, description, category, expense, container)


@app.command(name="list")
def list_transactions(
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    container: str = typer.Option(None, "--container", help=CONTAINER_HELP),
) -> None:
    """List your transactions."""
    list_command(limit, all, month, container)


@app.command()
def update(
    txn_id: int = typer.Argument(..., help="Transaction ID"),
    amount: str = typer.Argument(..., help="New amount"),
    description: str = typer.Argument(..., help="New description"),
    category: str = typer.Argument(..., help="New category"),
    expense: bool = typer.Option(False, "--expense", "-e", help="Record as an expense"),
) -> None:
    """Overwrite a transaction's amount, description and category."""
    update_command(txn_id, amount, description, category, expense)


@app.command()
def delete(txn_id: int = typer.Argument(..., help="Transaction ID")) -> None:
    """Delete a transaction."""
    delete_command(txn_id)


@app.command()
def balance(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    container: str = typer.Option(None, "--container", help=CONTAINER_HELP),
) -> None:
    """Show monthly and all-time balance."""
    balance_command(month, container)


@app.command()
def totals(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
    container: str = typer.Option(None, "--container", help=CONTAINER_HELP),
) -> None:
    """Show spending per category."""
    totals_command(month, histogram, container)


@app.command()
def months(container: str = typer.Option(None, "--container", help=CONTAINER_HELP)) -> None:
    """List months that have transactions."""
    months_command(container)


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
    container: str = typer.Option(None, "--container", help=CONTAINER_HELP),
) -> None:
    """Export transactions as CSV."""
    export_command(output, container)


@app.command(name="import")
def import_csv(
    csv_path: str = typer.Argument(..., help="CSV file to import"),
    amount_column: int = typer.Option(..., "--amount", help="Zero-based amount column"),
    description_column: int = typer.Option(..., "--description", help="Zero-based description column"),
    category_column: int = typer.Option(..., "--category", help="Zero-based category column"),
    date_column: int = typer.Option(..., "--date", help="Zero-based date column"),
    skip_header: bool = typer.Option(None, "--skip-header/--no-skip-header", help="First row is a header"),
    container: str = typer.Option(None, "--container", help=CONTAINER_HELP),
) -> None:
    """Import transactions from a CSV file."""
    import_command(csv_path, amount_column, description_column, category_column, date_column, skip_header, container)


@container_app.command(name="list")
def container_list() -> None:
    """List containers."""
    container_list_command()


@container_app.command(name="add")
def container_add(name: str) -> None:
    """Create a container."""
    container_add_command(name)


@container_app.command(name="rename")
def container_rename(container_id: int, name: str) -> None:
    """Rename a container."""
    container_rename_command(container_id, name)


@container_app.command(name="delete")
def container_delete(
    container_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a container and all of its transactions."""
    container_delete_command(container_id, yes)


@category_app.command(name="list")
def category_list() -> None:
    """List categories."""
    category_list_command()


@category_app.command(name="add")
def category_add(name: str) -> None:
    """Add a category."""
    category_add_command(name)


@category_app.command(name="delete")
def category_delete(name: str) -> None:
    """Delete a category (default categories are kept)."""
    category_delete_command(name)


if __name__ == "__main__":
    app()
