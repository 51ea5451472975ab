"""Flat, ungrouped lookups of email addresses and phone numbers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rolodex.domain.matching import bulk_lookup
from rolodex.domain.model import LookupKey, MatchResult, RawIdentifier
from rolodex.domain.normalization import DEFAULT_NORMALIZER, IdentifierNormalizer, try_normalize

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Iterable

    from rolodex.domain.model import NormalizedIdentifier
    from rolodex.domain.ports.directory import AccountDirectory


@dataclass(frozen=True, slots=True, eq=False)
class BulkLookupResults(Mapping[LookupKey, MatchResult]):
    """Matches keyed by the key each input was presented under, plus rejected inputs."""

    results: Mapping[LookupKey, MatchResult] = field(default_factory=dict[LookupKey, MatchResult])
    rejected: tuple[RawIdentifier, ...] = ()

    def __getitem__(self, key: LookupKey) -> MatchResult:
        return self.results[key]

    def __iter__(self) -> Iterator[LookupKey]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


async def lookup_identifiers(
    emails: Iterable[str],
    phones: Iterable[str],
    directory: AccountDirectory,
    *,
    region_hint: str | None = None,
    normalizer: IdentifierNormalizer = DEFAULT_NORMALIZER,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> BulkLookupResults:
    raw_identifiers = [RawIdentifier.email(email) for email in emails]
    raw_identifiers.extend(RawIdentifier.phone(phone) for phone in phones)

    normalized: list[NormalizedIdentifier] = []
    rejected: list[RawIdentifier] = []
    for raw in raw_identifiers:
        identifier = try_normalize(raw, region_hint, normalizer=normalizer)
        if identifier is None:
            rejected.append(raw)
        else:
            normalized.append(identifier)

    results = await bulk_lookup(normalized, directory, timeout=timeout, cancel=cancel)
    return BulkLookupResults(results=results, rejected=tuple(rejected))
