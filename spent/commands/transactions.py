"""Transaction commands: add, list, update, delete, export and import."""

from pathlib import Path

from rich.table import Table

from spent.commands.common import console, fail, money, open_api, resolve_container, unwrap
from spent.domain.transactions import parse_amount


def _amount_from_input(raw_amount: str, expense: bool) -> int:
    try:
        amount = parse_amount(raw_amount)
    except ValueError as e:
        fail(str(e))
    return -abs(amount) if expense else amount


def add_command(
    amount: str,
    description: str | None = None,
    category: str | None = None,
    expense: bool = False,
    container: str | None = None,
) -> None:
    """Add a transaction dated now.

    Args:
        amount: Amount in major units (e.g., "12.50", "$1,200").
        description: Optional description, "Untitled" when omitted.
        category: Optional category, "Other" when omitted.
        expense: Record the amount as an expense (negative).
        container: Container name or id, default container when omitted.
    """
    with open_api() as (api, settings):
        target = resolve_container(api, container)
        cents = _amount_from_input(amount, expense)

        txn = unwrap(api.add_transaction(cents, description, category, target["id"]))

    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  ID: {txn['id']}")
    console.print(f"  Date: {txn['date']}")
    console.print(f"  Description: {txn['description']}")
    console.print(f"  Amount: {money(txn['amount'], settings)}")
    console.print(f"  Category: {txn['category']}")
    console.print(f"  Container: {target['name']}")


def list_command(
    limit: int = 50,
    all: bool = False,
    month: str | None = None,
    container: str | None = None,
) -> None:
    """List transactions, newest first."""
    actual_limit = None if all else limit

    with open_api() as (api, settings):
        target = resolve_container(api, container)
        if month:
            transactions = unwrap(api.get_transactions_for_month(target["id"], month, actual_limit))
        else:
            transactions = unwrap(api.get_transactions(target["id"], actual_limit))

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    title = f"{target['name']} - {month or 'all months'} (showing {len(transactions)})"
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")

    for txn in transactions:
        table.add_row(str(txn["id"]), txn["date"], txn["description"], money(txn["amount"], settings), txn["category"])

    console.print(table)


def update_command(txn_id: int, amount: str, description: str, category: str, expense: bool = False) -> None:
    """Overwrite a transaction's amount, description and category."""
    cents = _amount_from_input(amount, expense)

    with open_api() as (api, settings):
        txn = unwrap(api.update_transaction(txn_id, cents, description, category))

    console.print(
        f"[green]✓[/green] Updated transaction {txn['id']}: "
        f"{txn['description']} {money(txn['amount'], settings)} ({txn['category']})"
    )


def delete_command(txn_id: int) -> None:
    """Delete a transaction."""
    with open_api() as (api, _):
        unwrap(api.delete_transaction(txn_id))
    console.print(f"[green]✓[/green] Deleted transaction {txn_id}")


def export_command(output: str | None = None, container: str | None = None) -> None:
    """Export a container's transactions as CSV to a file or stdout."""
    with open_api() as (api, _):
        target = resolve_container(api, container)
        csv_text = unwrap(api.export_csv(target["id"]))

    if output is None:
        print(csv_text, end="")
        return

    output_path = Path(output).expanduser()
    try:
        output_path.write_text(csv_text, encoding="utf-8")
    except OSError as e:
        fail(f"Filesystem error: {e}")
    console.print(f"[green]✓[/green] Exported {target['name']} to {output_path}")


def import_command(
    csv_path: str,
    amount_column: int,
    description_column: int,
    category_column: int,
    date_column: int,
    skip_header: bool | None = None,
    container: str | None = None,
) -> None:
    """Import a CSV file using zero-based column positions."""
    path = Path(csv_path).expanduser()
    try:
        csv_text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        fail(f"Could not read {path}: {e}")
    except UnicodeDecodeError as e:
        fail(f"{path.name} is not UTF-8 text: {e.reason}")

    with open_api() as (api, settings):
        target = resolve_container(api, container)
        if skip_header is None:
            skip_header = bool(settings["import"]["skip_header"])

        console.print(f"[cyan]Importing {path.name} into {target['name']}...[/cyan]")
        result = unwrap(
            api.import_csv(
                csv_text, target["id"], amount_column, description_column, category_column, date_column, skip_header
            )
        )

    console.print(f"[green]✓[/green] Imported {result['success_count']} transactions")
    if result["error_count"]:
        console.print(f"[yellow]{result['error_count']} rows skipped:[/yellow]")
        for message in result["errors"]:
            console.print(f"  [dim]{message}[/dim]")
