from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from rolodex.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAccountUnitOfWork,
    StartupError,
    configured_engine,
    create_database_engine,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.accounts import make_account

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyAccountUnitOfWork()
    with pytest.raises(StartupError):
        configured_engine()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_unit_of_work_persists_accounts(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    ann = make_account("ann", email="ann@example.org")

    with SqlAlchemyAccountUnitOfWork() as uow:
        uow.repositories.accounts.add(ann)
        uow.commit()

    with SqlAlchemyAccountUnitOfWork() as uow:
        loaded = uow.repositories.accounts.get(ann.account_id)

    assert loaded is not None
    assert loaded.identifiers == ann.identifiers


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    ann = make_account("ann", email="ann@example.org")

    with pytest.raises(RuntimeError), SqlAlchemyAccountUnitOfWork() as uow:
        uow.repositories.accounts.add(ann)
        raise RuntimeError("boom")

    with SqlAlchemyAccountUnitOfWork() as uow:
        assert uow.repositories.accounts.get(ann.account_id) is None


def test_repositories_are_unavailable_outside_the_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyAccountUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_in_memory_engine_is_shared_across_connections() -> None:
    engine = create_database_engine("sqlite+pysqlite:///:memory:")
    startup(engine=engine, force=True)
    ann = make_account("ann", email="ann@example.org")

    with SqlAlchemyAccountUnitOfWork() as uow:
        uow.repositories.accounts.add(ann)
        uow.commit()

    with SqlAlchemyAccountUnitOfWork() as uow:
        assert uow.repositories.accounts.get(ann.account_id) is not None
