"""Database schema initialization, migrations and seeding."""

import logging
import os
import sqlite3
from pathlib import Path

from spent.dates import now_timestamp

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER_NAME = "Personal"

DEFAULT_CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Income",
    "Other",
)


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "spent" / "spent.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def _seed_default_container(cursor: sqlite3.Cursor) -> int:
    """Create the default container if none exist and return its id."""
    cursor.execute("SELECT COUNT(*) FROM containers")
    if cursor.fetchone()[0] == 0:
        cursor.execute(
            "INSERT INTO containers (name, created_at, is_default) VALUES (?, ?, 1)",
            (DEFAULT_CONTAINER_NAME, now_timestamp()),
        )
        logger.info("Created default container %r", DEFAULT_CONTAINER_NAME)

    cursor.execute("SELECT id FROM containers WHERE is_default = 1")
    return int(cursor.fetchone()[0])


def _seed_default_categories(cursor: sqlite3.Cursor) -> None:
    """Insert the default categories if the registry is empty."""
    cursor.execute("SELECT COUNT(*) FROM categories")
    if cursor.fetchone()[0] > 0:
        return

    cursor.executemany(
        "INSERT INTO categories (name, is_default) VALUES (?, 1)",
        [(name,) for name in DEFAULT_CATEGORIES],
    )
    logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))


def init_database(conn: sqlite3.Connection) -> None:
    """Create or upgrade the schema and seed defaults.

    Safe to run against an up-to-date database: every step is a no-op when
    its table or column already exists, and seeding only fills empty tables.
    Must run before foreign key enforcement is switched on, since SQLite
    refuses to add a REFERENCES column with a non-NULL default otherwise.

    Args:
        conn: Open database connection.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    cursor = conn.cursor()

    try:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS containers (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                created_at TEXT NOT NULL,
                is_default INTEGER NOT NULL DEFAULT 0
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                is_default INTEGER NOT NULL DEFAULT 0
            )
        """
        )

        # At most one container may carry the default flag
        cursor.execute(
            "CREATE UNIQUE INDEX IF NOT EXISTS idx_containers_single_default ON containers(is_default) "
            "WHERE is_default = 1"
        )

        default_container_id = _seed_default_container(cursor)

        cursor.execute(
            f"""
            CREATE TABLE IF NOT EXISTS transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                amount INTEGER NOT NULL,
                description TEXT NOT NULL,
                category TEXT NOT NULL,
                date TEXT NOT NULL,
                container_id INTEGER NOT NULL DEFAULT {default_container_id}
                    REFERENCES containers(id) ON DELETE CASCADE
            )
        """
        )

        # Migrations for older databases (must run before creating indexes on new columns)
        cursor.execute("PRAGMA table_info(transactions)")
        columns = [row[1] for row in cursor.fetchall()]

        # Migration: transactions from before containers existed belong to the default one
        if "container_id" not in columns:
            cursor.execute(
                f"ALTER TABLE transactions ADD COLUMN container_id INTEGER NOT NULL "
                f"DEFAULT {default_container_id} REFERENCES containers(id) ON DELETE CASCADE"
            )
            logger.info("Moved existing transactions into container %d", default_container_id)

        cursor.execute("PRAGMA table_info(categories)")
        category_columns = [row[1] for row in cursor.fetchall()]

        # Migration: Add 'is_default' column if missing
        if "is_default" not in category_columns:
            cursor.execute("ALTER TABLE categories ADD COLUMN is_default INTEGER NOT NULL DEFAULT 0")

        _seed_default_categories(cursor)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_container_date ON transactions(container_id, date)")
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_txn_container_category ON transactions(container_id, category)"
        )

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
