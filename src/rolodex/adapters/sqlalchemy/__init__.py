"""SQLAlchemy adapter package for rolodex."""

from __future__ import annotations

from .mappings import account_identifier_table, account_table, create_all_tables, metadata
from .repositories import SqlAlchemyAccountDirectory, SqlAlchemyAccountRepository
from .unit_of_work import (
    SqlAlchemyAccountUnitOfWork,
    StartupError,
    configured_engine,
    create_database_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAccountDirectory",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyAccountUnitOfWork",
    "StartupError",
    "account_identifier_table",
    "account_table",
    "configured_engine",
    "create_all_tables",
    "create_database_engine",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
