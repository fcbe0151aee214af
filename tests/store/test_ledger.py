"""Tests for LedgerStore."""

import re
import threading

import pytest

from spent.dates import current_month
from spent.domain.models import CategoryName, Money, Month, Timestamp
from spent.errors import InvalidAmountError, NotFoundError
from spent.store import ContainerManager, LedgerStore


def _insert(ledger: LedgerStore, container_id: int, amount: int, date: str, category: str = "Other") -> None:
    ledger.insert(container_id, Money(amount), f"txn {amount}", CategoryName(category), Timestamp(date))


class TestAddTransaction:
    """Tests for adding transactions."""

    def test_defaults(self, ledger: LedgerStore, default_id: int) -> None:
        """Should default description and category and stamp the current time."""
        txn = ledger.add(default_id, Money(-450))

        assert txn.id > 0
        assert txn.description == "Untitled"
        assert txn.category == "Other"
        assert txn.container_id == default_id
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", txn.date)
        assert ledger.get(txn.id) == txn

    def test_explicit_fields(self, ledger: LedgerStore, default_id: int) -> None:
        """Should store the given description and category."""
        txn = ledger.add(default_id, Money(300000), "Salary", CategoryName("Income"))

        assert (txn.amount, txn.description, txn.category) == (300000, "Salary", "Income")

    def test_unknown_container(self, ledger: LedgerStore) -> None:
        """Should raise NotFoundError when the container does not exist."""
        with pytest.raises(NotFoundError):
            ledger.add(999, Money(100))

    def test_amount_beyond_64_bits(self, ledger: LedgerStore, default_id: int) -> None:
        """Should raise InvalidAmountError and store nothing."""
        with pytest.raises(InvalidAmountError):
            ledger.add(default_id, Money(10**22))

        assert ledger.list_transactions(default_id) == []


class TestListTransactions:
    """Tests for listing transactions."""

    def test_newest_first(self, ledger: LedgerStore, default_id: int) -> None:
        """Should order by date descending."""
        _insert(ledger, default_id, 1, "2024-01-10 00:00:00")
        _insert(ledger, default_id, 2, "2024-03-01 00:00:00")
        _insert(ledger, default_id, 3, "2024-02-15 00:00:00")

        amounts = [txn.amount for txn in ledger.list_transactions(default_id)]

        assert amounts == [2, 3, 1]

    def test_limit(self, ledger: LedgerStore, default_id: int) -> None:
        """Should cap the number of rows when a limit is given."""
        for day in range(1, 6):
            _insert(ledger, default_id, day, f"2024-01-0{day} 00:00:00")

        assert len(ledger.list_transactions(default_id, limit=2)) == 2
        assert len(ledger.list_transactions(default_id)) == 5

    def test_scoped_to_container(
        self, ledger: LedgerStore, containers: ContainerManager, default_id: int
    ) -> None:
        """Should only return the requested container's rows."""
        other = containers.create("Business")
        _insert(ledger, default_id, 1, "2024-01-01 00:00:00")
        _insert(ledger, other.id, 2, "2024-01-01 00:00:00")

        assert [txn.amount for txn in ledger.list_transactions(other.id)] == [2]

    def test_for_month(self, ledger: LedgerStore, default_id: int) -> None:
        """Should filter on the YYYY-MM prefix."""
        _insert(ledger, default_id, 1, "2024-02-29 23:59:59")
        _insert(ledger, default_id, 2, "2024-03-01 00:00:00")
        _insert(ledger, default_id, 3, "2024-03-31 12:00:00")
        _insert(ledger, default_id, 4, "2023-03-15 12:00:00")

        march = ledger.list_for_month(default_id, Month("2024-03"))

        assert [txn.amount for txn in march] == [3, 2]
        assert len(ledger.list_for_month(default_id, Month("2024-03"), limit=1)) == 1

    def test_month_filter_treats_wildcards_literally(self, ledger: LedgerStore, default_id: int) -> None:
        """Should not let LIKE wildcards in the month widen the match."""
        _insert(ledger, default_id, 1, "2024-03-01 00:00:00")

        assert ledger.list_for_month(default_id, Month("2024-%")) == []
        assert ledger.balance_for_month(default_id, Month("____-03")) == 0


class TestUpdateDelete:
    """Tests for updating and deleting transactions."""

    def test_update_overwrites_mutable_fields(self, ledger: LedgerStore, default_id: int) -> None:
        """Should change amount, description and category but keep date and container."""
        _insert(ledger, default_id, -100, "2024-01-05 10:00:00")
        original = ledger.list_transactions(default_id)[0]

        updated = ledger.update(original.id, Money(-250), "Groceries", CategoryName("Food & Dining"))

        assert updated.amount == -250
        assert updated.description == "Groceries"
        assert updated.category == "Food & Dining"
        assert updated.date == original.date
        assert updated.container_id == default_id

    def test_update_amount_beyond_64_bits(self, ledger: LedgerStore, default_id: int) -> None:
        """Should raise InvalidAmountError and keep the old amount."""
        txn = ledger.add(default_id, Money(-100))

        with pytest.raises(InvalidAmountError):
            ledger.update(txn.id, Money(2**63), "x", CategoryName("Other"))

        assert ledger.get(txn.id).amount == -100

    def test_update_unknown_id(self, ledger: LedgerStore) -> None:
        """Should raise NotFoundError for a missing id."""
        with pytest.raises(NotFoundError):
            ledger.update(999, Money(1), "x", CategoryName("Other"))

    def test_delete_is_idempotent(self, ledger: LedgerStore, default_id: int) -> None:
        """Should remove the row and ignore repeat or unknown deletes."""
        txn = ledger.add(default_id, Money(-100))

        ledger.delete(txn.id)
        ledger.delete(txn.id)
        ledger.delete(12345)

        assert ledger.list_transactions(default_id) == []


class TestBalances:
    """Tests for balance aggregation."""

    def test_empty_is_zero(self, ledger: LedgerStore, default_id: int) -> None:
        """Should return zero with no rows."""
        assert ledger.all_time_balance(default_id) == 0
        assert ledger.monthly_balance(default_id) == 0
        assert ledger.balance_for_month(default_id, Month("2024-01")) == 0

    def test_all_time_tracks_adds_and_deletes(self, ledger: LedgerStore, default_id: int) -> None:
        """Should equal the sum over surviving rows."""
        kept = [ledger.add(default_id, Money(amount)) for amount in (1000, -250, -75)]
        dropped = ledger.add(default_id, Money(-9999))
        ledger.delete(dropped.id)

        assert ledger.all_time_balance(default_id) == sum(txn.amount for txn in kept)

    def test_monthly_matches_current_month(self, ledger: LedgerStore, default_id: int) -> None:
        """Should equal balance_for_month of the current month."""
        ledger.add(default_id, Money(5000))
        ledger.add(default_id, Money(-1250))
        _insert(ledger, default_id, -700, "2001-01-01 00:00:00")

        assert ledger.monthly_balance(default_id) == ledger.balance_for_month(default_id, current_month())
        assert ledger.monthly_balance(default_id) == 3750

    def test_balance_for_month(self, ledger: LedgerStore, default_id: int) -> None:
        """Should sum only the given month."""
        _insert(ledger, default_id, 1000, "2024-05-01 00:00:00")
        _insert(ledger, default_id, -300, "2024-05-20 00:00:00")
        _insert(ledger, default_id, -50, "2024-06-01 00:00:00")

        assert ledger.balance_for_month(default_id, Month("2024-05")) == 700


class TestCategoryTotals:
    """Tests for category totals."""

    def test_only_expenses_largest_first(self, ledger: LedgerStore, default_id: int) -> None:
        """Should sum negative rows per category, most negative first."""
        _insert(ledger, default_id, -500, "2024-05-01 00:00:00", "Food & Dining")
        _insert(ledger, default_id, -700, "2024-05-02 00:00:00", "Food & Dining")
        _insert(ledger, default_id, -3000, "2024-05-03 00:00:00", "Bills & Utilities")
        _insert(ledger, default_id, 500, "2024-05-04 00:00:00", "Income")
        _insert(ledger, default_id, -9999, "2024-06-01 00:00:00", "Shopping")

        totals = ledger.category_totals_for_month(default_id, Month("2024-05"))

        assert totals == [("Bills & Utilities", -3000), ("Food & Dining", -1200)]

    def test_current_month(self, ledger: LedgerStore, default_id: int) -> None:
        """Should cover the current month and never include income."""
        ledger.add(default_id, Money(500), "Refund", CategoryName("Income"))
        ledger.add(default_id, Money(-200), "Bus", CategoryName("Transportation"))

        assert ledger.category_totals(default_id) == [("Transportation", -200)]


class TestAvailableMonths:
    """Tests for available_months."""

    def test_distinct_descending(self, ledger: LedgerStore, default_id: int) -> None:
        """Should list each month once, newest first."""
        for date in ("2024-01-05 00:00:00", "2024-03-01 00:00:00", "2024-01-20 00:00:00", "2023-12-31 23:59:59"):
            _insert(ledger, default_id, -1, date)

        assert ledger.available_months(default_id) == ["2024-03", "2024-01", "2023-12"]


class TestExportCsv:
    """Tests for export_csv."""

    def test_export(self, ledger: LedgerStore, default_id: int) -> None:
        """Should render header and rows in major units."""
        ledger.insert(
            default_id, Money(-1250), "Coffee", CategoryName("Food & Dining"), Timestamp("2024-03-15 00:00:00")
        )

        lines = ledger.export_csv(default_id).splitlines()

        assert lines[0] == "ID,Amount,Description,Category,Date"
        assert lines[1].endswith(",-12.50,Coffee,Food & Dining,2024-03-15 00:00:00")


class TestConcurrency:
    """Tests for serialized access from several threads."""

    def test_parallel_adds(self, ledger: LedgerStore, default_id: int) -> None:
        """Should apply every add exactly once."""

        def worker() -> None:
            for _ in range(25):
                ledger.add(default_id, Money(-1))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert ledger.all_time_balance(default_id) == -100
        assert len(ledger.list_transactions(default_id)) == 100
