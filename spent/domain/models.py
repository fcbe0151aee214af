"""Domain type definitions for spent.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in cents (minor units), negative for expenses
- Month: Month in YYYY-MM format
- CategoryName: Name of a category
- Timestamp: Date in canonical YYYY-MM-DD HH:MM:SS format
"""

from dataclasses import dataclass, field
from typing import NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

# Canonical, zero-padded and lexicographically sortable
Timestamp = NewType("Timestamp", str)


@dataclass(frozen=True)
class Container:
    """A named workspace that scopes transactions."""

    id: int
    name: str
    created_at: Timestamp
    is_default: bool = False


@dataclass(frozen=True)
class Category:
    """A category name from the shared registry."""

    id: int
    name: CategoryName
    is_default: bool = False


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: int
    amount: Money
    description: str
    category: CategoryName
    date: Timestamp
    container_id: int


@dataclass(frozen=True)
class ColumnMapping:
    """Zero-based column positions for CSV import."""

    amount: int
    description: int
    category: int
    date: int


@dataclass
class ImportResult:
    """Tally of a CSV import, including per-row diagnostics."""

    success_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)

    def record_error(self, message: str) -> None:
        self.error_count += 1
        self.errors.append(message)
