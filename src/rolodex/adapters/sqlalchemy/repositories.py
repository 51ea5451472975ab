"""Repository and directory implementations backed by SQLAlchemy."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from itertools import batched
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from rolodex.adapters.sqlalchemy.mappings import account_identifier_table, account_table
from rolodex.config.directory import DEFAULT_DIRECTORY_CHUNK_SIZE
from rolodex.domain.gate import is_matchable, stored_lookup_key
from rolodex.domain.model import Account, DirectoryMatch, LookupKey, StoredIdentifier
from rolodex.domain.normalization import DEFAULT_NORMALIZER, IdentifierNormalizer
from rolodex.domain.ports.directory import DirectoryUnavailableError

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine, Row
    from sqlalchemy.orm import Session

    from rolodex.domain.model import AccountId

log = logging.getLogger(__name__)


class SqlAlchemyAccountRepository:
    """Identity-management side: persists accounts with their stored identifiers."""

    def __init__(
        self,
        session: Session,
        *,
        normalizer: IdentifierNormalizer = DEFAULT_NORMALIZER,
    ) -> None:
        self.session = session
        self._normalizer = normalizer

    def add(self, entity: Account) -> None:
        self.session.execute(
            insert(account_table).values(account_id=entity.account_id, username=entity.username)
        )
        self._write_identifiers(entity)

    def save(self, account: Account) -> None:
        existing = self.session.execute(
            select(account_table.c.account_id).where(
                account_table.c.account_id == account.account_id
            )
        ).scalar_one_or_none()
        if existing is None:
            self.add(account)
            return
        self.session.execute(
            delete(account_identifier_table).where(
                account_identifier_table.c.account_id == account.account_id
            )
        )
        self._write_identifiers(account)

    def get(self, account_id: AccountId) -> Account | None:
        username = self.session.execute(
            select(account_table.c.username).where(account_table.c.account_id == account_id)
        ).scalar_one_or_none()
        if username is None:
            return None
        rows = self.session.execute(
            select(account_identifier_table)
            .where(account_identifier_table.c.account_id == account_id)
            .order_by(account_identifier_table.c.position)
        ).all()
        return Account(
            username=username,
            account_id=account_id,
            _identifiers=[_stored_identifier(row) for row in rows],
        )

    def _write_identifiers(self, account: Account) -> None:
        rows = [
            {
                "account_id": account.account_id,
                "position": position,
                "kind": stored.kind,
                "value": stored.value,
                "lookup_value": _lookup_value(stored, self._normalizer),
                "visibility": stored.visibility,
                "verified": stored.verified,
            }
            for position, stored in enumerate(account.identifiers)
        ]
        if rows:
            self.session.execute(insert(account_identifier_table), rows)


class SqlAlchemyAccountDirectory:
    """Answers lookups from the identifier table, one ``IN`` query per chunk of keys.

    The gate is applied to every candidate row, so flag changes saved by the
    repository take effect on the next query.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        chunk_size: int = DEFAULT_DIRECTORY_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._engine = engine
        self._chunk_size = chunk_size

    async def find_accounts_by_identifiers(
        self,
        keys: frozenset[LookupKey],
    ) -> dict[LookupKey, DirectoryMatch]:
        # a query abandoned at the deadline finishes on this thread, unjoined
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="rolodex-directory")
        try:
            return await asyncio.get_running_loop().run_in_executor(
                executor, self._find_accounts, keys
            )
        finally:
            executor.shutdown(wait=False)

    def _find_accounts(self, keys: frozenset[LookupKey]) -> dict[LookupKey, DirectoryMatch]:
        matches: dict[LookupKey, DirectoryMatch] = {}
        try:
            with self._engine.connect() as connection:
                for chunk in batched(sorted(keys), self._chunk_size):
                    self._match_chunk(connection, frozenset(chunk), matches)
        except SQLAlchemyError as exc:
            log.warning("Directory query failed: %s", exc)
            raise DirectoryUnavailableError(f"Directory database error: {exc}") from exc
        return matches

    def _match_chunk(
        self,
        connection: Connection,
        chunk: frozenset[LookupKey],
        matches: dict[LookupKey, DirectoryMatch],
    ) -> None:
        stmt = select(
            account_identifier_table.c.account_id,
            account_identifier_table.c.kind,
            account_identifier_table.c.value,
            account_identifier_table.c.lookup_value,
            account_identifier_table.c.visibility,
            account_identifier_table.c.verified,
        ).where(account_identifier_table.c.lookup_value.in_([key.value for key in chunk]))

        for row in connection.execute(stmt):
            key = LookupKey(kind=row.kind, value=row.lookup_value)
            if key not in chunk or not is_matchable(_stored_identifier(row)):
                continue
            existing = matches.get(key)
            if existing is not None and existing.account_id != row.account_id:
                raise DirectoryUnavailableError(
                    f"{key} is claimed by {existing.account_id} and {row.account_id}"
                )
            matches[key] = DirectoryMatch(account_id=row.account_id, canonical=row.lookup_value)


def _lookup_value(stored: StoredIdentifier, normalizer: IdentifierNormalizer) -> str | None:
    key = stored_lookup_key(stored, normalizer=normalizer)
    return key.value if key is not None else None


def _stored_identifier(row: Row[tuple[object, ...]]) -> StoredIdentifier:
    return StoredIdentifier(
        kind=row.kind,
        value=row.value,
        visibility=row.visibility,
        verified=bool(row.verified),
    )
