"""Report commands: balances, category totals and months."""

from spent.commands.common import console, fail, money, open_api, resolve_container, unwrap
from spent.dates import current_month, format_month_display
from spent.domain.models import Month


def month_label(month: str | None) -> str:
    """Display label for a YYYY-MM option, the current month when None."""
    try:
        return format_month_display(Month(month or current_month()))
    except ValueError:
        fail(f"Invalid month '{month}', expected YYYY-MM")


def calculate_histogram_bar_length(amount: int, max_amount: int, bar_width: int) -> int:
    """Scale an amount to a histogram bar of at most bar_width characters."""
    if max_amount == 0:
        return 0
    return int((abs(amount) / abs(max_amount)) * bar_width)


def balance_command(month: str | None = None, container: str | None = None) -> None:
    """Show the monthly and all-time balance."""
    with open_api() as (api, settings):
        target = resolve_container(api, container)
        label = month_label(month)

        if month:
            monthly = unwrap(api.get_balance_for_month(target["id"], month))
        else:
            monthly = unwrap(api.get_monthly_balance(target["id"]))
        all_time = unwrap(api.get_all_time_balance(target["id"]))

    console.print(f"\n[bold cyan]{target['name']}[/bold cyan]")
    console.print(f"  {label}: {money(monthly, settings)}")
    console.print(f"  All time: {money(all_time, settings)}")


def totals_command(
    month: str | None = None, histogram: bool = True, container: str | None = None, bar_width: int = 30
) -> None:
    """Show spending per category, largest first."""
    with open_api() as (api, settings):
        target = resolve_container(api, container)
        label = month_label(month)

        if month:
            totals = unwrap(api.get_category_totals_for_month(target["id"], month))
        else:
            totals = unwrap(api.get_category_totals(target["id"]))

    if not totals:
        console.print(f"[yellow]No spending in {label}[/yellow]")
        return

    console.print(f"\n[bold red]Spending - {label}[/bold red]")
    max_amount = totals[0][1]
    for category, total in totals:
        amount_display = money(total, settings, colour=False)
        if histogram:
            bar = "█" * calculate_histogram_bar_length(total, max_amount, bar_width)
            console.print(f"  {category:20} {amount_display:>14} {bar}")
        else:
            console.print(f"  {category}: {amount_display}")

    console.print(f"\n[bold]Total:[/bold] {money(sum(total for _, total in totals), settings)}")


def months_command(container: str | None = None) -> None:
    """List the months that have transactions."""
    with open_api() as (api, _):
        target = resolve_container(api, container)
        months = unwrap(api.get_available_months(target["id"]))

    if not months:
        console.print("[yellow]No transactions found[/yellow]")
        return

    for month in months:
        console.print(f"  {month}  [dim]{format_month_display(Month(month))}[/dim]")
