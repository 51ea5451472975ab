"""Ports for persisting accounts on behalf of identity management."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rolodex.domain.model import Account

if TYPE_CHECKING:
    from rolodex.domain.model import AccountId


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class AccountRepository(Repository[Account], Protocol):
    """Persistence contract for accounts and their stored identifiers."""

    def get(self, account_id: AccountId) -> Account | None: ...

    def save(self, account: Account) -> None: ...
