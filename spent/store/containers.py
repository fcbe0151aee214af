"""Container persistence: named workspaces that scope transactions."""

import logging
import sqlite3

from spent.dates import now_timestamp
from spent.domain.models import Container, Timestamp
from spent.errors import DuplicateNameError, NotFoundError, ProtectedResourceError
from spent.store.database import Database

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, created_at, is_default"


def _to_container(row: sqlite3.Row) -> Container:
    return Container(
        id=row["id"],
        name=row["name"],
        created_at=Timestamp(row["created_at"]),
        is_default=bool(row["is_default"]),
    )


class ContainerManager:
    """Sole writer of container rows."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def list_all(self) -> list[Container]:
        """Get all containers, default first, then oldest first."""
        with self.db.session() as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM containers ORDER BY is_default DESC, created_at ASC, id ASC"
            ).fetchall()
        return [_to_container(row) for row in rows]

    def get(self, container_id: int) -> Container:
        """Look up a container by id.

        Raises:
            NotFoundError: If no container has this id.
        """
        with self.db.session() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM containers WHERE id = ?", (container_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"Container {container_id} not found")
        return _to_container(row)

    def default(self) -> Container:
        """Get the protected default container."""
        with self.db.session() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM containers WHERE is_default = 1").fetchone()
        return _to_container(row)

    def create(self, name: str) -> Container:
        """Create a new, non-default container.

        Args:
            name: Unique container name.

        Returns:
            The persisted container.

        Raises:
            DuplicateNameError: If the name is already taken.
            sqlite3.Error: If database operation fails.
        """
        created_at = now_timestamp()
        try:
            with self.db.session() as conn:
                cursor = conn.execute(
                    "INSERT INTO containers (name, created_at, is_default) VALUES (?, ?, 0)",
                    (name, created_at),
                )
                container_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise DuplicateNameError(f"Container '{name}' already exists") from e

        logger.debug("Created container %d %r", container_id, name)
        return Container(id=container_id, name=name, created_at=created_at, is_default=False)

    def rename(self, container_id: int, name: str) -> Container:
        """Rename a container.

        Raises:
            NotFoundError: If no container has this id.
            DuplicateNameError: If the name is already taken.
        """
        try:
            with self.db.session() as conn:
                cursor = conn.execute("UPDATE containers SET name = ? WHERE id = ?", (name, container_id))
                if cursor.rowcount == 0:
                    raise NotFoundError(f"Container {container_id} not found")
                row = conn.execute(f"SELECT {_COLUMNS} FROM containers WHERE id = ?", (container_id,)).fetchone()
        except sqlite3.IntegrityError as e:
            raise DuplicateNameError(f"Container '{name}' already exists") from e

        return _to_container(row)

    def delete(self, container_id: int) -> None:
        """Delete a container together with all of its transactions.

        Raises:
            ProtectedResourceError: If the container is the default one.
            NotFoundError: If no container has this id.
        """
        with self.db.session() as conn:
            row = conn.execute("SELECT is_default FROM containers WHERE id = ?", (container_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"Container {container_id} not found")
            if row["is_default"]:
                raise ProtectedResourceError("Cannot delete the default container")

            # Transactions go with it through ON DELETE CASCADE
            conn.execute("DELETE FROM containers WHERE id = ?", (container_id,))

        logger.info("Deleted container %d", container_id)
