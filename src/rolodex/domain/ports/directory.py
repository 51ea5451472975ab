"""Port for querying the account directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rolodex.domain.model import DirectoryMatch, LookupKey


class DirectoryUnavailableError(RuntimeError):
    """Raised by directory adapters when the backing service cannot answer."""


@runtime_checkable
class AccountDirectory(Protocol):
    """Resolves lookup keys to the accounts that own them.

    Implementations only consider gate-eligible identifiers, return at most one
    account per key, omit keys without an owner and have no side effects.
    Splitting large key sets into several backend requests is up to them.
    """

    async def find_accounts_by_identifiers(
        self,
        keys: frozenset[LookupKey],
    ) -> Mapping[LookupKey, DirectoryMatch]: ...


__all__ = ["AccountDirectory", "DirectoryUnavailableError"]
