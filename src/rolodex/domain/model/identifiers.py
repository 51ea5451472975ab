"""Identifier value objects shared by the normalizer, the gate and the matcher."""

from __future__ import annotations

from dataclasses import dataclass

from rolodex.domain.model.enums import IdentifierKind, Visibility
from rolodex.domain.model.primitives import AccountId  # noqa: TC001

_KIND_BY_PREFIX: dict[str, IdentifierKind] = {kind.prefix: kind for kind in IdentifierKind}


@dataclass(frozen=True, slots=True, order=True)
class LookupKey:
    """Canonical, kind-tagged value used as the matching unit.

    Two raw inputs refer to the same contact point iff they produce equal keys.
    """

    kind: IdentifierKind
    value: str

    def __str__(self) -> str:
        return f"{self.kind.prefix}:{self.value}"

    @classmethod
    def parse(cls, text: str) -> LookupKey:
        """Read a key back from its ``p:<value>`` / ``e:<value>`` string form."""

        prefix, sep, value = text.partition(":")
        kind = _KIND_BY_PREFIX.get(prefix)
        if not sep or kind is None or not value:
            raise ValueError(f"Invalid lookup key: {text!r}")
        return cls(kind=kind, value=value)


@dataclass(frozen=True, slots=True)
class RawIdentifier:
    """A phone number or email address exactly as the caller supplied it."""

    kind: IdentifierKind
    value: str

    @classmethod
    def phone(cls, value: str) -> RawIdentifier:
        return cls(kind=IdentifierKind.PHONE, value=value)

    @classmethod
    def email(cls, value: str) -> RawIdentifier:
        return cls(kind=IdentifierKind.EMAIL, value=value)


@dataclass(frozen=True, slots=True)
class NormalizedIdentifier:
    raw: RawIdentifier
    key: LookupKey
    coerced: bool

    @property
    def presented_key(self) -> LookupKey:
        """Key a lookup result for this input is reported under.

        Same as ``key`` unless the input was coerced; coerced inputs keep their raw
        value so an exact and a coerced spelling of one number stay apart.
        """

        if not self.coerced:
            return self.key
        return LookupKey(kind=self.key.kind, value=self.raw.value)


@dataclass(slots=True, kw_only=True)
class StoredIdentifier:
    """An identifier held on an account, together with its privacy and trust flags."""

    kind: IdentifierKind
    value: str
    visibility: Visibility = Visibility.PRIVATE
    verified: bool = False


@dataclass(frozen=True, slots=True)
class DirectoryMatch:
    """What the directory reports for a key it could resolve."""

    account_id: AccountId
    canonical: str


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Positive outcome of a bulk lookup for one key.

    ``coerced`` holds the canonical value that matched when the caller's input
    differed from it, and is empty otherwise.
    """

    account_id: AccountId
    coerced: str = ""
