"""Command-dispatch surface for front ends.

Every operation returns a ``(value, error)`` pair. On success ``error`` is
None; on failure ``value`` is None and ``error`` is the failure as a plain
message. Records come back as dicts, the shape a front end serializes.
"""

import logging
import sqlite3
from collections.abc import Callable
from dataclasses import asdict
from pathlib import Path
from typing import Any, TypeVar

from spent.domain.models import CategoryName, ColumnMapping, Money, Month
from spent.errors import SpentError
from spent.importer import import_csv
from spent.store import CategoryRegistry, ContainerManager, Database, LedgerStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

Result = tuple[T | None, str | None]


def _attempt(operation: Callable[[], T]) -> Result[T]:
    try:
        return operation(), None
    except (SpentError, sqlite3.Error) as e:
        logger.debug("Command failed: %s", e)
        return None, str(e)


class SpentApi:
    """The ledger operations exposed to a front end."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self.containers = ContainerManager(db)
        self.categories = CategoryRegistry(db)
        self.ledger = LedgerStore(db)

    @classmethod
    def open(cls, db_path: Path | None = None) -> "SpentApi":
        """Open the database at db_path (or the default location).

        Raises:
            sqlite3.Error: If the schema cannot be initialized.
        """
        return cls(Database.open(db_path))

    def close(self) -> None:
        self.db.close()

    # Transactions

    def add_transaction(
        self, amount: int, description: str | None, category: str | None, container_id: int
    ) -> Result[dict[str, Any]]:
        return _attempt(
            lambda: asdict(
                self.ledger.add(
                    container_id,
                    Money(amount),
                    description,
                    CategoryName(category) if category is not None else None,
                )
            )
        )

    def get_transactions(self, container_id: int, limit: int | None = None) -> Result[list[dict[str, Any]]]:
        return _attempt(lambda: [asdict(txn) for txn in self.ledger.list_transactions(container_id, limit)])

    def get_transactions_for_month(
        self, container_id: int, month: str, limit: int | None = None
    ) -> Result[list[dict[str, Any]]]:
        return _attempt(lambda: [asdict(txn) for txn in self.ledger.list_for_month(container_id, Month(month), limit)])

    def update_transaction(
        self, txn_id: int, amount: int, description: str, category: str
    ) -> Result[dict[str, Any]]:
        return _attempt(
            lambda: asdict(self.ledger.update(txn_id, Money(amount), description, CategoryName(category)))
        )

    def delete_transaction(self, txn_id: int) -> Result[None]:
        return _attempt(lambda: self.ledger.delete(txn_id))

    def export_csv(self, container_id: int) -> Result[str]:
        return _attempt(lambda: self.ledger.export_csv(container_id))

    def import_csv(
        self,
        csv_content: str,
        container_id: int,
        amount_column: int,
        description_column: int,
        category_column: int,
        date_column: int,
        skip_header: bool,
    ) -> Result[dict[str, Any]]:
        mapping = ColumnMapping(
            amount=amount_column,
            description=description_column,
            category=category_column,
            date=date_column,
        )
        return _attempt(lambda: asdict(import_csv(self.ledger, csv_content, container_id, mapping, skip_header)))

    # Aggregates

    def get_monthly_balance(self, container_id: int) -> Result[int]:
        return _attempt(lambda: self.ledger.monthly_balance(container_id))

    def get_all_time_balance(self, container_id: int) -> Result[int]:
        return _attempt(lambda: self.ledger.all_time_balance(container_id))

    def get_balance_for_month(self, container_id: int, month: str) -> Result[int]:
        return _attempt(lambda: self.ledger.balance_for_month(container_id, Month(month)))

    def get_category_totals(self, container_id: int) -> Result[list[tuple[str, int]]]:
        return _attempt(lambda: self.ledger.category_totals(container_id))

    def get_category_totals_for_month(self, container_id: int, month: str) -> Result[list[tuple[str, int]]]:
        return _attempt(lambda: self.ledger.category_totals_for_month(container_id, Month(month)))

    def get_available_months(self, container_id: int) -> Result[list[str]]:
        return _attempt(lambda: self.ledger.available_months(container_id))

    # Categories

    def get_categories(self) -> Result[list[str]]:
        return _attempt(self.categories.names)

    def get_category_records(self) -> Result[list[dict[str, Any]]]:
        """Categories with their default flag, in list order."""
        return _attempt(lambda: [asdict(category) for category in self.categories.list_all()])

    def add_category(self, name: str) -> Result[None]:
        return _attempt(lambda: self.categories.add(CategoryName(name)))

    def delete_category(self, name: str) -> Result[None]:
        return _attempt(lambda: self.categories.delete(CategoryName(name)))

    # Containers

    def get_containers(self) -> Result[list[dict[str, Any]]]:
        return _attempt(lambda: [asdict(container) for container in self.containers.list_all()])

    def add_container(self, name: str) -> Result[dict[str, Any]]:
        return _attempt(lambda: asdict(self.containers.create(name)))

    def update_container(self, container_id: int, name: str) -> Result[dict[str, Any]]:
        return _attempt(lambda: asdict(self.containers.rename(container_id, name)))

    def delete_container(self, container_id: int) -> Result[None]:
        return _attempt(lambda: self.containers.delete(container_id))
