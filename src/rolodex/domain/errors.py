"""Error taxonomy of the contact resolution engine."""

from __future__ import annotations


class ContactLookupError(RuntimeError):
    """Base class for contact resolution failures."""


class InvalidIdentifierError(ContactLookupError):
    """Raised when a raw phone number or email cannot be normalized.

    Non-fatal for batches: the offending identifier is skipped.
    """

    def __init__(self, message: str, *, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class InvalidRegionError(InvalidIdentifierError):
    """Raised when a region hint is needed but does not name a single numbering plan."""

    def __init__(self, message: str, *, raw: str, region: str | None) -> None:
        super().__init__(message, raw=raw)
        self.region = region


class LookupUnavailableError(ContactLookupError):
    """Raised when the directory cannot answer a batch; the whole batch must be retried."""


class CanceledError(ContactLookupError):
    """Raised when the caller aborts a pending batch."""
