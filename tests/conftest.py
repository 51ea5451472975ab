from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from rolodex.adapters.memory import InMemoryAccountDirectory
from rolodex.adapters.sqlalchemy import (
    SqlAlchemyAccountUnitOfWork,
    create_all_tables,
    create_database_engine,
    shutdown,
    startup,
)
from rolodex.config import LookupConfig

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture
def memory_directory() -> InMemoryAccountDirectory:
    return InMemoryAccountDirectory()


@pytest.fixture
def lookup_config() -> LookupConfig:
    return LookupConfig(default_region=None, timeout_seconds=5.0)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_database_engine("sqlite+pysqlite:///:memory:")
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyAccountUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyAccountUnitOfWork:
        return SqlAlchemyAccountUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
