"""Pure functions for transaction parsing and formatting.

This module contains the functional core for transaction operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in cents (Money type).
"""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal, DecimalException
from typing import TypedDict

from spent.domain.models import CategoryName, ColumnMapping, Money, Transaction

EXPORT_HEADER = "ID,Amount,Description,Category,Date"

DEFAULT_DESCRIPTION = "Untitled"
DEFAULT_CATEGORY = CategoryName("Other")
IMPORTED_DESCRIPTION = "Imported"

CURRENCY_SYMBOLS = ("$", "€", "£")

# SQLite INTEGER is a signed 64-bit value
MIN_AMOUNT = Money(-(2**63))
MAX_AMOUNT = Money(2**63 - 1)


class RawImportRow(TypedDict):
    """Mapped fields of one CSV record, before normalization."""

    amount: str
    description: str
    category: str
    date: str


def parse_amount(raw_amount: str) -> Money:
    """Parse a major-unit amount string into cents.

    Currency symbols and thousands separators are stripped, the remainder
    is read as a decimal and rounded half away from zero.

    Args:
        raw_amount: Amount as found in the import file (e.g., "$1,234.56").

    Returns:
        Amount in cents.

    Raises:
        ValueError: If the amount is not a finite number or does not fit in
            a signed 64-bit count of cents.
    """
    cleaned = raw_amount
    for symbol in CURRENCY_SYMBOLS:
        cleaned = cleaned.replace(symbol, "")
    cleaned = cleaned.replace(",", "").strip()

    # Decimal() would also accept underscore separators such as "1_000"
    if "_" in cleaned:
        raise ValueError(f"Could not parse amount '{raw_amount}'")

    try:
        value = Decimal(cleaned)
        if not value.is_finite():
            raise ValueError(f"Could not parse amount '{raw_amount}'")
        cents = int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except DecimalException as e:
        raise ValueError(f"Could not parse amount '{raw_amount}'") from e

    if not MIN_AMOUNT <= cents <= MAX_AMOUNT:
        raise ValueError(f"Amount '{raw_amount}' is out of range")
    return Money(cents)


def format_major_units(amount: Money) -> str:
    """Render cents as a fixed two-decimal major-unit value (e.g., "-12.50")."""
    sign = "-" if amount < 0 else ""
    whole, cents = divmod(abs(amount), 100)
    return f"{sign}{whole}.{cents:02d}"


def format_money_display(
    amount: Money, symbol: str = "$", position: str = "before", include_sign: bool = True
) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in cents.
        symbol: Currency symbol.
        position: "before" or "after" the number.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "-$1,234.45" or "+12.00 €" with "after").
    """
    number = f"{abs(amount) / 100:,.2f}"
    formatted = f"{symbol}{number}" if position == "before" else f"{number} {symbol}"

    if not include_sign:
        return formatted
    if amount < 0:
        return f"-{formatted}"
    return f"+{formatted}"


def render_export_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions as export CSV text.

    Fields are comma-joined without quoting, so embedded commas in a
    description or category shift columns on re-import.
    """
    lines = [EXPORT_HEADER]
    for txn in transactions:
        lines.append(
            f"{txn.id},{format_major_units(txn.amount)},{txn.description},{txn.category},{txn.date}"
        )
    return "\n".join(lines) + "\n"


def extract_import_row(record: Sequence[str], mapping: ColumnMapping) -> RawImportRow:
    """Pick the mapped columns out of one CSV record.

    Missing description and category fall back to "Imported" and "Other";
    missing amount and date become empty strings and fail normalization.
    """

    def column(index: int, fallback: str) -> str:
        if 0 <= index < len(record):
            return record[index]
        return fallback

    return RawImportRow(
        amount=column(mapping.amount, ""),
        description=column(mapping.description, IMPORTED_DESCRIPTION),
        category=column(mapping.category, DEFAULT_CATEGORY),
        date=column(mapping.date, ""),
    )


def import_row_number(index: int, skipped_header: bool) -> int:
    """1-based row number as a spreadsheet would show it."""
    return index + 2 if skipped_header else index + 1
