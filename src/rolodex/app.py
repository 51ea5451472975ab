"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from rolodex.adapters.directory_api import DirectoryApiClient
from rolodex.adapters.sqlalchemy import (
    SqlAlchemyAccountDirectory,
    SqlAlchemyAccountUnitOfWork,
    configured_engine,
    is_started,
    startup,
)
from rolodex.config import (
    DirectoryBackend,
    get_directory_api_config,
    get_directory_config,
    get_lookup_config,
)
from rolodex.domain.folding import resolve_contacts
from rolodex.domain.lookup import BulkLookupResults, lookup_identifiers
from rolodex.domain.model import Account, IdentifierKind, Visibility
from rolodex.domain.normalization import IdentifierNormalizer

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.engine import Engine

    from rolodex.config import DirectoryConfig, LookupConfig
    from rolodex.domain.model import Contact, ContactResolution
    from rolodex.domain.ports.directory import AccountDirectory


log = getLogger(__name__)


def build_directory(config: DirectoryConfig | None = None) -> AccountDirectory:
    """Create the directory adapter selected by configuration."""

    directory_config = config or get_directory_config()
    match directory_config.backend:
        case DirectoryBackend.SQLALCHEMY:
            return SqlAlchemyAccountDirectory(
                _database_engine(), chunk_size=directory_config.chunk_size
            )
        case DirectoryBackend.HTTP:
            return DirectoryApiClient(config=get_directory_api_config())


async def lookup_contact_list_async(
    contacts: Sequence[Contact],
    region_hint: str | None = None,
    *,
    directory: AccountDirectory | None = None,
    lookup_config: LookupConfig | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> list[ContactResolution]:
    """Resolve a structured contact list, one result per contact in input order."""

    config = lookup_config or get_lookup_config()
    effective_region = region_hint or config.default_region
    log.info(
        "Looking up %s contacts: region=%s",
        len(contacts),
        effective_region,
    )
    return await resolve_contacts(
        contacts,
        directory or build_directory(),
        region_hint=effective_region,
        normalizer=IdentifierNormalizer(phone_validation=config.phone_validation),
        timeout=timeout if timeout is not None else config.timeout_seconds,
        cancel=cancel,
    )


def lookup_contact_list(
    contacts: Sequence[Contact],
    region_hint: str | None = None,
    *,
    directory: AccountDirectory | None = None,
    lookup_config: LookupConfig | None = None,
    timeout: float | None = None,
) -> list[ContactResolution]:
    return asyncio.run(
        lookup_contact_list_async(
            contacts,
            region_hint,
            directory=directory,
            lookup_config=lookup_config,
            timeout=timeout,
        )
    )


async def bulk_lookup_contacts_async(
    emails: Iterable[str],
    phones: Iterable[str],
    region_hint: str | None = None,
    *,
    directory: AccountDirectory | None = None,
    lookup_config: LookupConfig | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> BulkLookupResults:
    """Resolve flat lists of emails and phone numbers in one batch."""

    config = lookup_config or get_lookup_config()
    results = await lookup_identifiers(
        emails,
        phones,
        directory or build_directory(),
        region_hint=region_hint or config.default_region,
        normalizer=IdentifierNormalizer(phone_validation=config.phone_validation),
        timeout=timeout if timeout is not None else config.timeout_seconds,
        cancel=cancel,
    )
    if results.rejected:
        log.info("Skipped %s identifiers that could not be normalized", len(results.rejected))
    return results


def bulk_lookup_contacts(
    emails: Iterable[str],
    phones: Iterable[str],
    region_hint: str | None = None,
    *,
    directory: AccountDirectory | None = None,
    lookup_config: LookupConfig | None = None,
    timeout: float | None = None,
) -> BulkLookupResults:
    return asyncio.run(
        bulk_lookup_contacts_async(
            emails,
            phones,
            region_hint,
            directory=directory,
            lookup_config=lookup_config,
            timeout=timeout,
        )
    )


def register_account(
    *,
    username: str,
    phone_numbers: Iterable[str] = (),
    emails: Iterable[str] = (),
    visibility: Visibility = Visibility.PRIVATE,
    verified: bool = False,
) -> Account:
    """Store an account in the SQL directory, standing in for identity management."""

    _database_engine()
    account = Account(username=username)
    for phone_number in phone_numbers:
        account.add_phone_number(phone_number, visibility=visibility)
        if verified:
            account.verify(IdentifierKind.PHONE, phone_number)
    for email in emails:
        account.add_email(email, visibility=visibility)
        if verified:
            account.verify(IdentifierKind.EMAIL, email)

    with SqlAlchemyAccountUnitOfWork() as uow:
        uow.repositories.accounts.add(account)
        uow.commit()
    log.info("Registered account %s (%s)", account.username, account.account_id)
    return account


def _database_engine() -> Engine:
    return configured_engine() if is_started() else startup()
