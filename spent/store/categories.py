"""Category registry persistence."""

import logging
import sqlite3

from spent.domain.models import Category, CategoryName
from spent.errors import DuplicateNameError
from spent.store.database import Database

logger = logging.getLogger(__name__)


class CategoryRegistry:
    """Sole writer of category rows.

    Transactions refer to categories by name only, so deleting a category
    leaves its label on existing transactions untouched.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    def list_all(self) -> list[Category]:
        """Get all categories, defaults first, then alphabetically."""
        with self.db.session() as conn:
            rows = conn.execute(
                "SELECT id, name, is_default FROM categories ORDER BY is_default DESC, name ASC"
            ).fetchall()
        return [Category(id=row["id"], name=CategoryName(row["name"]), is_default=bool(row["is_default"])) for row in rows]

    def names(self) -> list[CategoryName]:
        """Get all category names in list order."""
        return [category.name for category in self.list_all()]

    def add(self, name: CategoryName) -> None:
        """Add a user category.

        Raises:
            DuplicateNameError: If the category already exists.
        """
        try:
            with self.db.session() as conn:
                conn.execute("INSERT INTO categories (name, is_default) VALUES (?, 0)", (name,))
        except sqlite3.IntegrityError as e:
            raise DuplicateNameError(f"Category '{name}' already exists") from e
        logger.debug("Added category %r", name)

    def delete(self, name: CategoryName) -> None:
        """Delete a user category. Default or unknown names are ignored."""
        with self.db.session() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE name = ? AND is_default = 0", (name,))
        if cursor.rowcount:
            logger.debug("Deleted category %r", name)
