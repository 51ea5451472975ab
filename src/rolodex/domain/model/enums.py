"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class IdentifierKind(StrEnum):
    PHONE = "phone"
    EMAIL = "email"

    @property
    def prefix(self) -> str:
        """Single-letter tag used in the string form of lookup keys."""
        return self.value[0]


class Visibility(StrEnum):
    PUBLIC = "public"
    PRIVATE = "private"


class PhoneValidation(StrEnum):
    """How strictly a parsed phone number is checked against its numbering plan."""

    POSSIBLE = "possible"
    VALID = "valid"
