"""Shared database handle.

One SQLite connection serves every store. A lock serializes access, so
callers on different threads are totally ordered and never see a
half-applied write.
"""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from spent.store.schema import get_db_path, init_database

logger = logging.getLogger(__name__)


class Database:
    """Single connection guarded by a mutex."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._lock = threading.Lock()

    @classmethod
    def open(cls, db_path: Path | None = None) -> "Database":
        """Open the database, migrating and seeding the schema.

        Args:
            db_path: Path to the database file. If None, uses default location.

        Returns:
            Ready-to-use database handle.

        Raises:
            sqlite3.Error: If the schema cannot be initialized.
        """
        if db_path is None:
            db_path = get_db_path()

        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            init_database(conn)
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error:
            conn.close()
            raise

        logger.debug("Opened database at %s", db_path)
        return cls(conn)

    @contextmanager
    def session(self) -> Iterator[sqlite3.Connection]:
        """Hold the lock for one unit of work.

        Commits when the block exits normally, rolls back and re-raises
        otherwise.
        """
        with self._lock:
            try:
                yield self._conn
                self._conn.commit()
            except Exception:
                self._conn.rollback()
                raise

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
