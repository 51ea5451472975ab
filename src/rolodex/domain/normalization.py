"""Identifier normalization.

Responsibilities:
- turn raw phone numbers and email addresses into canonical lookup keys
- report whether the canonical form differs from what the caller typed
- stay pure: identical inputs always produce identical results
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import phonenumbers
from email_validator import EmailNotValidError, validate_email

from rolodex.domain.errors import InvalidIdentifierError, InvalidRegionError
from rolodex.domain.model import (
    IdentifierKind,
    LookupKey,
    NormalizedIdentifier,
    PhoneValidation,
    RawIdentifier,
)

log = logging.getLogger(__name__)

_NON_GEOGRAPHIC_REGION = "001"


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentifierNormalizer:
    """Kind-dispatched canonicalization rules for phone numbers and emails."""

    phone_validation: PhoneValidation = PhoneValidation.POSSIBLE

    def normalize(self, raw: RawIdentifier, region_hint: str | None = None) -> NormalizedIdentifier:
        match raw.kind:
            case IdentifierKind.PHONE:
                return self.normalize_phone(raw.value, region_hint)
            case IdentifierKind.EMAIL:
                return self.normalize_email(raw.value)

    def normalize_phone(self, raw: str, region_hint: str | None = None) -> NormalizedIdentifier:
        stripped = raw.strip()
        if not stripped:
            raise InvalidIdentifierError("Empty phone number", raw=raw)

        region = None if stripped.startswith("+") else _resolve_region(raw, region_hint)
        try:
            parsed = phonenumbers.parse(stripped, region)
        except phonenumbers.NumberParseException as exc:
            msg = f"Unparseable phone number {raw!r}: {exc}"
            raise InvalidIdentifierError(msg, raw=raw) from exc

        if not self._accepts(parsed):
            raise InvalidIdentifierError(
                f"Phone number {raw!r} is not {self.phone_validation} for its numbering plan",
                raw=raw,
            )

        canonical = phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
        return NormalizedIdentifier(
            raw=RawIdentifier.phone(raw),
            key=LookupKey(kind=IdentifierKind.PHONE, value=canonical),
            coerced=canonical != raw,
        )

    def normalize_email(self, raw: str) -> NormalizedIdentifier:
        trimmed = raw.strip()
        if not trimmed:
            raise InvalidIdentifierError("Empty email address", raw=raw)
        try:
            info = validate_email(trimmed, check_deliverability=False)
        except EmailNotValidError as exc:
            raise InvalidIdentifierError(f"Invalid email address {raw!r}: {exc}", raw=raw) from exc

        canonical = info.normalized.lower()
        return NormalizedIdentifier(
            raw=RawIdentifier.email(raw),
            key=LookupKey(kind=IdentifierKind.EMAIL, value=canonical),
            coerced=canonical != trimmed,
        )

    def _accepts(self, parsed: phonenumbers.PhoneNumber) -> bool:
        if self.phone_validation is PhoneValidation.VALID:
            return phonenumbers.is_valid_number(parsed)
        return phonenumbers.is_possible_number(parsed)


def _resolve_region(raw: str, region_hint: str | None) -> str:
    if region_hint is None or not region_hint.strip():
        raise InvalidRegionError(
            f"Phone number {raw!r} has no country prefix and no region hint was given",
            raw=raw,
            region=region_hint,
        )
    region = region_hint.strip().upper()
    if region == _NON_GEOGRAPHIC_REGION or region not in phonenumbers.SUPPORTED_REGIONS:
        raise InvalidRegionError(
            f"Region {region_hint!r} does not name a single numbering plan",
            raw=raw,
            region=region_hint,
        )
    return region


DEFAULT_NORMALIZER = IdentifierNormalizer()


def normalize(
    raw: RawIdentifier,
    region_hint: str | None = None,
    *,
    normalizer: IdentifierNormalizer = DEFAULT_NORMALIZER,
) -> NormalizedIdentifier:
    return normalizer.normalize(raw, region_hint)


def try_normalize(
    raw: RawIdentifier,
    region_hint: str | None = None,
    *,
    normalizer: IdentifierNormalizer = DEFAULT_NORMALIZER,
) -> NormalizedIdentifier | None:
    """Normalize ``raw`` or return ``None`` so batch callers can skip it."""

    try:
        return normalizer.normalize(raw, region_hint)
    except InvalidIdentifierError as exc:
        log.debug("Skipping %s identifier: %s", raw.kind, exc)
        return None


def make_phone_lookup_key(raw: str, region_hint: str | None = None) -> LookupKey:
    return DEFAULT_NORMALIZER.normalize_phone(raw, region_hint).key


def make_email_lookup_key(raw: str) -> LookupKey:
    return DEFAULT_NORMALIZER.normalize_email(raw).key
