"""Domain port definitions for adapters."""

from __future__ import annotations

from .directory import AccountDirectory, DirectoryUnavailableError
from .persistence import AccountRepository, Repository
from .unit_of_work import AccountRepositories, AccountUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "AccountDirectory",
    "AccountRepositories",
    "AccountRepository",
    "AccountUnitOfWork",
    "DirectoryUnavailableError",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
