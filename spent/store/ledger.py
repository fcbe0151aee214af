"""Transaction persistence and aggregation queries.

Every query except update/delete is scoped to one container. Month
filters are prefix matches on the canonical date string.
"""

import logging
import sqlite3
from typing import Any

from spent.dates import current_month, now_timestamp
from spent.domain.models import CategoryName, Money, Month, Timestamp, Transaction
from spent.domain.transactions import DEFAULT_CATEGORY, DEFAULT_DESCRIPTION, render_export_csv
from spent.errors import InvalidAmountError, NotFoundError
from spent.store.database import Database

logger = logging.getLogger(__name__)

_COLUMNS = "id, amount, description, category, date, container_id"

_MONTH_FILTER = "substr(date, 1, length(?)) = ?"


def _to_transaction(row: sqlite3.Row) -> Transaction:
    return Transaction(
        id=row["id"],
        amount=Money(row["amount"]),
        description=row["description"],
        category=CategoryName(row["category"]),
        date=Timestamp(row["date"]),
        container_id=row["container_id"],
    )


class LedgerStore:
    """Sole writer of transaction rows."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def add(
        self,
        container_id: int,
        amount: Money,
        description: str | None = None,
        category: CategoryName | None = None,
    ) -> Transaction:
        """Add a transaction stamped with the current local time.

        Args:
            container_id: Container to add to.
            amount: Amount in cents, negative for expenses.
            description: Defaults to "Untitled".
            category: Defaults to "Other".

        Returns:
            The persisted transaction.

        Raises:
            NotFoundError: If the container does not exist.
            sqlite3.Error: If database operation fails.
        """
        return self.insert(
            container_id,
            amount,
            DEFAULT_DESCRIPTION if description is None else description,
            DEFAULT_CATEGORY if category is None else category,
            now_timestamp(),
        )

    def insert(
        self, container_id: int, amount: Money, description: str, category: CategoryName, date: Timestamp
    ) -> Transaction:
        """Insert a transaction with an explicit canonical date.

        Raises:
            NotFoundError: If the container does not exist.
            InvalidAmountError: If the amount overflows a 64-bit integer.
            sqlite3.Error: If database operation fails.
        """
        try:
            with self.db.session() as conn:
                cursor = conn.execute(
                    "INSERT INTO transactions (amount, description, category, date, container_id) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (amount, description, category, date, container_id),
                )
                txn_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise NotFoundError(f"Container {container_id} not found") from e
        except OverflowError as e:
            raise InvalidAmountError(f"Amount {amount} is out of range") from e

        logger.debug("Inserted transaction %d into container %d", txn_id, container_id)
        return Transaction(
            id=txn_id,
            amount=amount,
            description=description,
            category=category,
            date=date,
            container_id=container_id,
        )

    def _select(self, where: str, params: list[Any], limit: int | None) -> list[Transaction]:
        query = f"SELECT {_COLUMNS} FROM transactions WHERE {where} ORDER BY date DESC, id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with self.db.session() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_to_transaction(row) for row in rows]

    def list_transactions(self, container_id: int, limit: int | None = None) -> list[Transaction]:
        """Get transactions, newest first.

        Args:
            container_id: Container to read.
            limit: Maximum number of transactions to return. If None, returns all.
        """
        return self._select("container_id = ?", [container_id], limit)

    def list_for_month(self, container_id: int, month: Month, limit: int | None = None) -> list[Transaction]:
        """Get transactions whose date starts with the given YYYY-MM, newest first."""
        return self._select(f"container_id = ? AND {_MONTH_FILTER}", [container_id, month, month], limit)

    def get(self, txn_id: int) -> Transaction:
        """Look up a transaction by id.

        Raises:
            NotFoundError: If no transaction has this id.
        """
        with self.db.session() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM transactions WHERE id = ?", (txn_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"Transaction {txn_id} not found")
        return _to_transaction(row)

    def update(self, txn_id: int, amount: Money, description: str, category: CategoryName) -> Transaction:
        """Overwrite amount, description and category. Date and container stay.

        Raises:
            NotFoundError: If no transaction has this id.
            InvalidAmountError: If the amount overflows a 64-bit integer.
        """
        try:
            with self.db.session() as conn:
                cursor = conn.execute(
                    "UPDATE transactions SET amount = ?, description = ?, category = ? WHERE id = ?",
                    (amount, description, category, txn_id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(f"Transaction {txn_id} not found")
                row = conn.execute(f"SELECT {_COLUMNS} FROM transactions WHERE id = ?", (txn_id,)).fetchone()
        except OverflowError as e:
            raise InvalidAmountError(f"Amount {amount} is out of range") from e

        return _to_transaction(row)

    def delete(self, txn_id: int) -> None:
        """Delete a transaction. Unknown ids are ignored."""
        with self.db.session() as conn:
            conn.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))

    def _sum(self, where: str, params: tuple[Any, ...]) -> Money:
        with self.db.session() as conn:
            row = conn.execute(f"SELECT COALESCE(SUM(amount), 0) FROM transactions WHERE {where}", params).fetchone()
        return Money(row[0])

    def all_time_balance(self, container_id: int) -> Money:
        """Sum of all amounts in the container."""
        return self._sum("container_id = ?", (container_id,))

    def balance_for_month(self, container_id: int, month: Month) -> Money:
        """Sum of amounts for one YYYY-MM month."""
        return self._sum(f"container_id = ? AND {_MONTH_FILTER}", (container_id, month, month))

    def monthly_balance(self, container_id: int) -> Money:
        """Sum of amounts for the current local month."""
        return self.balance_for_month(container_id, current_month())

    def category_totals_for_month(self, container_id: int, month: Month) -> list[tuple[CategoryName, Money]]:
        """Get expense totals per category for one month.

        Only negative amounts count. Largest expense (most negative) first.
        """
        with self.db.session() as conn:
            rows = conn.execute(
                f"""
                SELECT category, SUM(amount) AS total
                FROM transactions
                WHERE container_id = ? AND amount < 0 AND {_MONTH_FILTER}
                GROUP BY category
                ORDER BY total ASC, category ASC
                """,
                (container_id, month, month),
            ).fetchall()
        return [(CategoryName(row["category"]), Money(row["total"])) for row in rows]

    def category_totals(self, container_id: int) -> list[tuple[CategoryName, Money]]:
        """Expense totals per category for the current local month."""
        return self.category_totals_for_month(container_id, current_month())

    def available_months(self, container_id: int) -> list[Month]:
        """Distinct YYYY-MM months that have transactions, newest first."""
        with self.db.session() as conn:
            rows = conn.execute(
                "SELECT DISTINCT substr(date, 1, 7) AS month FROM transactions WHERE container_id = ? "
                "ORDER BY month DESC",
                (container_id,),
            ).fetchall()
        return [Month(row["month"]) for row in rows]

    def export_csv(self, container_id: int) -> str:
        """Render the container's full history as CSV, newest first."""
        return render_export_csv(self.list_transactions(container_id))
