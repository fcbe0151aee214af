"""Tests for schema creation, migration and seeding."""

import sqlite3
from pathlib import Path

import pytest

from spent.store import DEFAULT_CATEGORIES, DEFAULT_CONTAINER_NAME, Database, init_database


def _table_names(db_path: Path) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        return {row[0] for row in rows}
    finally:
        conn.close()


class TestInitDatabase:
    """Tests for init_database via Database.open."""

    def test_creates_tables(self, db: Database, db_path: Path) -> None:
        """Should create containers, categories and transactions."""
        assert {"containers", "categories", "transactions"} <= _table_names(db_path)

    def test_seeds_default_container(self, db: Database) -> None:
        """Should create exactly one default container named Personal."""
        with db.session() as conn:
            rows = conn.execute("SELECT name, is_default FROM containers").fetchall()

        assert [(row["name"], row["is_default"]) for row in rows] == [(DEFAULT_CONTAINER_NAME, 1)]

    def test_seeds_default_categories(self, db: Database) -> None:
        """Should insert the eight default categories flagged as defaults."""
        with db.session() as conn:
            rows = conn.execute("SELECT name, is_default FROM categories ORDER BY id").fetchall()

        assert [row["name"] for row in rows] == list(DEFAULT_CATEGORIES)
        assert all(row["is_default"] == 1 for row in rows)

    def test_reopen_is_idempotent(self, db_path: Path) -> None:
        """Should not duplicate seeds or fail when run again."""
        Database.open(db_path).close()
        Database.open(db_path).close()
        db = Database.open(db_path)

        with db.session() as conn:
            containers = conn.execute("SELECT COUNT(*) FROM containers").fetchone()[0]
            categories = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        db.close()

        assert containers == 1
        assert categories == len(DEFAULT_CATEGORIES)

    def test_does_not_reseed_after_user_changes(self, db_path: Path) -> None:
        """Should leave a non-empty category table alone on restart."""
        db = Database.open(db_path)
        with db.session() as conn:
            conn.execute("INSERT INTO categories (name, is_default) VALUES ('Pets', 0)")
        db.close()

        db = Database.open(db_path)
        with db.session() as conn:
            count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        db.close()

        assert count == len(DEFAULT_CATEGORIES) + 1

    def test_foreign_keys_enabled(self, db: Database) -> None:
        """Should enforce foreign keys on the shared connection."""
        with db.session() as conn:
            assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_single_default_container_enforced(self, db: Database) -> None:
        """Should reject a second default container."""
        with pytest.raises(sqlite3.IntegrityError), db.session() as conn:
            conn.execute(
                "INSERT INTO containers (name, created_at, is_default) VALUES ('Other', '2024-01-01 00:00:00', 1)"
            )


class TestLegacyMigration:
    """Tests for upgrading a database from before containers existed."""

    def _create_legacy(self, db_path: Path) -> None:
        conn = sqlite3.connect(db_path)
        conn.execute(
            """
            CREATE TABLE transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                amount INTEGER NOT NULL,
                description TEXT NOT NULL,
                category TEXT NOT NULL,
                date TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                is_default INTEGER NOT NULL DEFAULT 0
            )
            """
        )
        conn.executemany(
            "INSERT INTO transactions (amount, description, category, date) VALUES (?, ?, ?, ?)",
            [
                (-500, "Lunch", "Food & Dining", "2023-05-01 12:00:00"),
                (10000, "Pay", "Income", "2023-05-02 09:00:00"),
            ],
        )
        conn.commit()
        conn.close()

    def test_historical_rows_move_to_default_container(self, db_path: Path) -> None:
        """Should add container_id pointing every old row at the default container."""
        self._create_legacy(db_path)

        db = Database.open(db_path)
        with db.session() as conn:
            default_id = conn.execute("SELECT id FROM containers WHERE is_default = 1").fetchone()[0]
            rows = conn.execute("SELECT container_id FROM transactions").fetchall()
        db.close()

        assert len(rows) == 2
        assert all(row["container_id"] == default_id for row in rows)

    def test_migration_runs_once(self, db_path: Path) -> None:
        """Should be a no-op on the second open."""
        self._create_legacy(db_path)
        Database.open(db_path).close()

        db = Database.open(db_path)
        with db.session() as conn:
            columns = [row[1] for row in conn.execute("PRAGMA table_info(transactions)").fetchall()]
        db.close()

        assert columns.count("container_id") == 1

    def test_adds_is_default_to_old_categories(self, tmp_path: Path) -> None:
        """Should add the is_default column to a categories table that lacks it."""
        conn = sqlite3.connect(tmp_path / "old.db")
        conn.execute("CREATE TABLE categories (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL UNIQUE)")
        conn.execute("INSERT INTO categories (name) VALUES ('Groceries')")
        conn.commit()

        init_database(conn)

        rows = conn.execute("SELECT name, is_default FROM categories").fetchall()
        conn.close()
        assert rows == [("Groceries", 0)]
