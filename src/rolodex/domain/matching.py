"""Bulk matching of lookup keys against the account directory.

Every key a caller wants resolved goes to the directory in one logical batch.
Keys without an owner are absent from the result; absence is authoritative.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from rolodex.domain.errors import CanceledError, LookupUnavailableError
from rolodex.domain.model import DirectoryMatch, LookupKey, MatchResult
from rolodex.domain.ports.directory import DirectoryUnavailableError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable

    from rolodex.domain.model import NormalizedIdentifier
    from rolodex.domain.ports.directory import AccountDirectory

log = logging.getLogger(__name__)


async def bulk_lookup(
    identifiers: Iterable[NormalizedIdentifier],
    directory: AccountDirectory,
    *,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> dict[LookupKey, MatchResult]:
    """Resolve the de-duplicated keys of ``identifiers`` with a single directory query.

    Results are keyed by each input's ``presented_key``: exact inputs under their
    canonical key with an empty ``coerced``, coerced inputs under their raw value
    with ``coerced`` set to the canonical value that matched.

    Raises ``LookupUnavailableError`` when the directory fails, times out or
    answers with something other than a mapping of requested keys to matches,
    and ``CanceledError`` when ``cancel`` is set before the answer arrives.
    Nothing is returned in either case.
    """

    presented = list(identifiers)
    requested = frozenset(identifier.key for identifier in presented)
    if not requested:
        return {}

    log.info(
        "Bulk lookup of %s keys (%s coerced inputs)",
        len(requested),
        sum(1 for identifier in presented if identifier.coerced),
    )
    matches = await _query_directory(directory, requested, timeout=timeout, cancel=cancel)
    validated = dict(_validated(matches, requested))

    results: dict[LookupKey, MatchResult] = {}
    for identifier in presented:
        match = validated.get(identifier.key)
        if match is None:
            continue
        coerced = (match.canonical or identifier.key.value) if identifier.coerced else ""
        results[identifier.presented_key] = MatchResult(
            account_id=match.account_id, coerced=coerced
        )

    log.info("Bulk lookup matched %s of %s keys", len(validated), len(requested))
    return results


async def _query_directory(
    directory: AccountDirectory,
    keys: frozenset[LookupKey],
    *,
    timeout: float | None,
    cancel: asyncio.Event | None,
) -> Mapping[LookupKey, DirectoryMatch]:
    if cancel is not None and cancel.is_set():
        raise CanceledError("Lookup canceled by caller")
    try:
        async with asyncio.timeout(timeout):
            query = directory.find_accounts_by_identifiers(keys)
            if cancel is None:
                return await query
            return await _until_canceled(query, cancel)
    except TimeoutError as exc:
        raise LookupUnavailableError(f"Directory lookup timed out after {timeout}s") from exc
    except DirectoryUnavailableError as exc:
        raise LookupUnavailableError(f"Directory unavailable: {exc}") from exc


async def _until_canceled[T](awaitable: Awaitable[T], cancel: asyncio.Event) -> T:
    query = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({query, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        query.cancel()
        waiter.cancel()
        await asyncio.gather(query, waiter, return_exceptions=True)

    if query in done:
        return query.result()
    raise CanceledError("Lookup canceled by caller")


def _validated(
    matches: object,
    requested: frozenset[LookupKey],
) -> list[tuple[LookupKey, DirectoryMatch]]:
    if not isinstance(matches, Mapping):
        raise LookupUnavailableError(
            f"Malformed directory response: expected a mapping, got {type(matches).__name__}"
        )
    validated: list[tuple[LookupKey, DirectoryMatch]] = []
    for key, match in matches.items():
        if not isinstance(key, LookupKey) or key not in requested:
            raise LookupUnavailableError(f"Malformed directory response: unexpected key {key!r}")
        if not isinstance(match, DirectoryMatch) or not match.account_id:
            raise LookupUnavailableError(f"Malformed directory response for {key}: {match!r}")
        validated.append((key, match))
    return validated
