from __future__ import annotations

import pytest

from rolodex.domain.errors import InvalidIdentifierError, InvalidRegionError
from rolodex.domain.model import IdentifierKind, LookupKey, PhoneValidation, RawIdentifier
from rolodex.domain.normalization import (
    IdentifierNormalizer,
    make_email_lookup_key,
    make_phone_lookup_key,
    normalize,
    try_normalize,
)


def test_phone_without_prefix_gets_region_calling_code() -> None:
    result = normalize(RawIdentifier.phone("5551234567"), "US")

    assert result.key == LookupKey(kind=IdentifierKind.PHONE, value="+15551234567")
    assert result.coerced is True


def test_phone_already_canonical_is_not_coerced() -> None:
    result = normalize(RawIdentifier.phone("+15551234567"), "US")

    assert result.key.value == "+15551234567"
    assert result.coerced is False


def test_prefixed_phone_ignores_region_hint() -> None:
    assert make_phone_lookup_key("+442079460958", "US").value == "+442079460958"
    assert make_phone_lookup_key("+442079460958").value == "+442079460958"


def test_formatted_phone_is_coerced_to_e164() -> None:
    result = normalize(RawIdentifier.phone("+1 (555) 123-4567"))

    assert result.key.value == "+15551234567"
    assert result.coerced is True


def test_region_hint_is_case_insensitive() -> None:
    assert make_phone_lookup_key("5551234567", "us") == make_phone_lookup_key("5551234567", "US")


def test_same_digits_differ_by_region() -> None:
    us = make_phone_lookup_key("2079460958", "US")
    gb = make_phone_lookup_key("2079460958", "GB")

    assert us.value == "+12079460958"
    assert gb.value == "+442079460958"
    assert us != gb


@pytest.mark.parametrize("region", [None, "", "XX", "001"])
def test_phone_without_prefix_needs_a_single_region(region: str | None) -> None:
    with pytest.raises(InvalidRegionError) as exc:
        normalize(RawIdentifier.phone("5551234567"), region)

    assert exc.value.raw == "5551234567"
    assert exc.value.region == region


@pytest.mark.parametrize("raw", ["", "   ", "not a number", "12"])
def test_unusable_phone_numbers_are_rejected(raw: str) -> None:
    with pytest.raises(InvalidIdentifierError):
        normalize(RawIdentifier.phone(raw), "US")


def test_valid_mode_accepts_numbering_plan_numbers() -> None:
    strict = IdentifierNormalizer(phone_validation=PhoneValidation.VALID)

    result = strict.normalize_phone("2015550123", "US")

    assert result.key.value == "+12015550123"


def test_email_is_lowercased_and_trimmed() -> None:
    result = normalize(RawIdentifier.email("  Ann@Example.ORG "))

    assert result.key == LookupKey(kind=IdentifierKind.EMAIL, value="ann@example.org")
    assert result.coerced is True


def test_canonical_email_is_not_coerced() -> None:
    result = normalize(RawIdentifier.email(" ann@example.org"))

    assert result.key.value == "ann@example.org"
    assert result.coerced is False


@pytest.mark.parametrize("raw", ["", "ann", "ann@", "@example.org", "ann@@example.org"])
def test_implausible_emails_are_rejected(raw: str) -> None:
    with pytest.raises(InvalidIdentifierError):
        normalize(RawIdentifier.email(raw))


def test_normalization_is_deterministic() -> None:
    raw_phone = RawIdentifier.phone("555 123 4567")
    raw_email = RawIdentifier.email("Bob@Example.org")

    assert normalize(raw_phone, "US") == normalize(raw_phone, "US")
    assert normalize(raw_email) == normalize(raw_email)


def test_phone_and_email_keys_never_collide() -> None:
    assert make_email_lookup_key("ann@example.org") != make_phone_lookup_key("+15551234567")


def test_try_normalize_returns_none_on_failure() -> None:
    assert try_normalize(RawIdentifier.phone("5551234567")) is None
    assert try_normalize(RawIdentifier.email("nope")) is None
    assert try_normalize(RawIdentifier.email("ann@example.org")) is not None


def test_presented_key_keeps_raw_value_only_when_coerced() -> None:
    coerced = normalize(RawIdentifier.phone("5551234567"), "US")
    exact = normalize(RawIdentifier.phone("+15551234567"))

    assert coerced.presented_key == LookupKey(kind=IdentifierKind.PHONE, value="5551234567")
    assert exact.presented_key == exact.key
