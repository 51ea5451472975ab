"""Remote directory service adapter."""

from __future__ import annotations

from .client import LOOKUP_PATH, DirectoryApiClient, DirectoryApiError
from .schema import KeyPayload, LookupRequest, LookupResponse, MatchPayload

__all__ = [
    "LOOKUP_PATH",
    "DirectoryApiClient",
    "DirectoryApiError",
    "KeyPayload",
    "LookupRequest",
    "LookupResponse",
    "MatchPayload",
]
