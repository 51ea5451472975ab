"""Fold bulk lookup results back into one resolution per contact."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rolodex.domain.matching import bulk_lookup
from rolodex.domain.model import ContactResolution
from rolodex.domain.normalization import DEFAULT_NORMALIZER, IdentifierNormalizer, try_normalize

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence

    from rolodex.domain.model import (
        Contact,
        ContactComponent,
        LookupKey,
        MatchResult,
        NormalizedIdentifier,
    )
    from rolodex.domain.ports.directory import AccountDirectory

log = logging.getLogger(__name__)

type _KeyedComponent = tuple[ContactComponent, LookupKey]


async def resolve_contacts(
    contacts: Sequence[Contact],
    directory: AccountDirectory,
    *,
    region_hint: str | None = None,
    normalizer: IdentifierNormalizer = DEFAULT_NORMALIZER,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> list[ContactResolution]:
    """Resolve every contact with one batched directory query.

    The first component, in input order, whose key matched decides the
    contact's resolution. Output order and length follow ``contacts``.
    """

    keyed: list[list[_KeyedComponent]] = []
    identifiers: list[NormalizedIdentifier] = []
    for contact in contacts:
        components: list[_KeyedComponent] = []
        for component in contact.components:
            normalized = try_normalize(component.identifier, region_hint, normalizer=normalizer)
            if normalized is None:
                continue
            identifiers.append(normalized)
            components.append((component, normalized.presented_key))
        keyed.append(components)

    matches = await bulk_lookup(identifiers, directory, timeout=timeout, cancel=cancel)

    resolutions = [
        _fold(index, contact, components, matches)
        for index, (contact, components) in enumerate(zip(contacts, keyed, strict=True))
    ]
    log.info(
        "Resolved %s of %s contacts",
        sum(1 for resolution in resolutions if resolution.resolved),
        len(resolutions),
    )
    return resolutions


def _fold(
    index: int,
    contact: Contact,
    components: list[_KeyedComponent],
    matches: dict[LookupKey, MatchResult],
) -> ContactResolution:
    for component, key in components:
        match = matches.get(key)
        if match is None:
            continue
        return ContactResolution(
            contact_index=index,
            contact_name=contact.name,
            resolved=True,
            account_id=match.account_id,
            component=component,
            coerced=match.coerced,
        )
    return ContactResolution(contact_index=index, contact_name=contact.name)
