"""Shared fixtures: a fresh database per test."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from spent.api import SpentApi
from spent.store import CategoryRegistry, ContainerManager, Database, LedgerStore


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "spent.db"


@pytest.fixture
def db(db_path: Path) -> Iterator[Database]:
    database = Database.open(db_path)
    yield database
    database.close()


@pytest.fixture
def containers(db: Database) -> ContainerManager:
    return ContainerManager(db)


@pytest.fixture
def categories(db: Database) -> CategoryRegistry:
    return CategoryRegistry(db)


@pytest.fixture
def ledger(db: Database) -> LedgerStore:
    return LedgerStore(db)


@pytest.fixture
def default_id(containers: ContainerManager) -> int:
    return containers.default().id


@pytest.fixture
def api(db: Database) -> SpentApi:
    return SpentApi(db)
