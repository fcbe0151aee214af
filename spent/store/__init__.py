"""Database store layer - provides persistence for the application.

This module re-exports the store classes for easy importing.
"""

from spent.store.categories import CategoryRegistry
from spent.store.containers import ContainerManager
from spent.store.database import Database
from spent.store.ledger import LedgerStore
from spent.store.schema import (
    DEFAULT_CATEGORIES,
    DEFAULT_CONTAINER_NAME,
    database_exists,
    get_db_path,
    init_database,
)

__all__ = [
    # Schema
    "DEFAULT_CATEGORIES",
    "DEFAULT_CONTAINER_NAME",
    "database_exists",
    "get_db_path",
    "init_database",
    # Stores
    "CategoryRegistry",
    "ContainerManager",
    "Database",
    "LedgerStore",
]
