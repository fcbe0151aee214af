"""Domain models and types for spent.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from spent.domain.models import (
    Category,
    CategoryName,
    ColumnMapping,
    Container,
    ImportResult,
    Money,
    Month,
    Timestamp,
    Transaction,
)

__all__ = [
    "Category",
    "CategoryName",
    "ColumnMapping",
    "Container",
    "ImportResult",
    "Money",
    "Month",
    "Timestamp",
    "Transaction",
]
