"""Domain model for contact resolution."""

from __future__ import annotations

from .account import Account, IdentifierNotFoundError
from .contacts import Contact, ContactComponent, ContactResolution
from .enums import IdentifierKind, PhoneValidation, Visibility
from .identifiers import (
    DirectoryMatch,
    LookupKey,
    MatchResult,
    NormalizedIdentifier,
    RawIdentifier,
    StoredIdentifier,
)
from .primitives import (
    AccountId,
    EmailAddress,
    PhoneNumber,
    RawPhoneNumber,
    RegionCode,
    Username,
)

__all__ = [
    "Account",
    "AccountId",
    "Contact",
    "ContactComponent",
    "ContactResolution",
    "DirectoryMatch",
    "EmailAddress",
    "IdentifierKind",
    "IdentifierNotFoundError",
    "LookupKey",
    "MatchResult",
    "NormalizedIdentifier",
    "PhoneNumber",
    "PhoneValidation",
    "RawIdentifier",
    "RawPhoneNumber",
    "RegionCode",
    "StoredIdentifier",
    "Username",
    "Visibility",
]
