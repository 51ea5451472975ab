"""In-process account directory.

Holds ``Account`` aggregates directly and evaluates the visibility/verification
gate on every query, so changes made through the accounts show up immediately.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rolodex.domain.gate import eligible_identifiers
from rolodex.domain.model import DirectoryMatch
from rolodex.domain.normalization import DEFAULT_NORMALIZER, IdentifierNormalizer
from rolodex.domain.ports.directory import DirectoryUnavailableError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rolodex.domain.model import Account, AccountId, LookupKey

log = logging.getLogger(__name__)


class DuplicateOwnerError(DirectoryUnavailableError):
    """Raised when two accounts claim the same eligible identifier."""


class InMemoryAccountDirectory:
    def __init__(
        self,
        accounts: Iterable[Account] = (),
        *,
        normalizer: IdentifierNormalizer = DEFAULT_NORMALIZER,
    ) -> None:
        self._normalizer = normalizer
        self._accounts: dict[AccountId, Account] = {}
        for account in accounts:
            self.add(account)

    def add(self, account: Account) -> None:
        self._accounts[account.account_id] = account

    def get(self, account_id: AccountId) -> Account | None:
        return self._accounts.get(account_id)

    def save(self, account: Account) -> None:
        self._accounts[account.account_id] = account

    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._accounts.values())

    async def find_accounts_by_identifiers(
        self,
        keys: frozenset[LookupKey],
    ) -> dict[LookupKey, DirectoryMatch]:
        matches: dict[LookupKey, DirectoryMatch] = {}
        for account in self._accounts.values():
            eligible = eligible_identifiers(account, normalizer=self._normalizer)
            for key in eligible & keys:
                existing = matches.get(key)
                if existing is not None and existing.account_id != account.account_id:
                    raise DuplicateOwnerError(
                        f"{key} is claimed by {existing.account_id} and {account.account_id}"
                    )
                matches[key] = DirectoryMatch(
                    account_id=account.account_id,
                    canonical=key.value,
                )
        log.debug("In-memory directory matched %s of %s keys", len(matches), len(keys))
        return matches
