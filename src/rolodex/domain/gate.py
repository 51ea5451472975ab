"""Visibility/verification gate over the identifiers an account stores."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rolodex.domain.errors import InvalidIdentifierError
from rolodex.domain.model import RawIdentifier, Visibility
from rolodex.domain.normalization import DEFAULT_NORMALIZER, IdentifierNormalizer

if TYPE_CHECKING:
    from rolodex.domain.model import Account, LookupKey, StoredIdentifier

log = logging.getLogger(__name__)


def is_matchable(stored: StoredIdentifier) -> bool:
    """Only public and verified identifiers may ever be matched by a lookup."""

    return stored.visibility is Visibility.PUBLIC and stored.verified


def stored_lookup_key(
    stored: StoredIdentifier,
    *,
    normalizer: IdentifierNormalizer = DEFAULT_NORMALIZER,
) -> LookupKey | None:
    """Canonical key of a stored value, or ``None`` if it does not normalize.

    Stored phone numbers are expected to carry their country prefix, so no
    region hint is applied.
    """

    try:
        return normalizer.normalize(RawIdentifier(kind=stored.kind, value=stored.value)).key
    except InvalidIdentifierError as exc:
        log.warning("Stored %s identifier cannot be normalized: %s", stored.kind, exc)
        return None


def eligible_identifiers(
    account: Account,
    *,
    normalizer: IdentifierNormalizer = DEFAULT_NORMALIZER,
) -> frozenset[LookupKey]:
    """Keys under which ``account`` may be found right now.

    Recomputed on every call since visibility and verification change between lookups.
    """

    keys: set[LookupKey] = set()
    for stored in account.identifiers:
        if not is_matchable(stored):
            continue
        key = stored_lookup_key(stored, normalizer=normalizer)
        if key is not None:
            keys.add(key)
    return frozenset(keys)
