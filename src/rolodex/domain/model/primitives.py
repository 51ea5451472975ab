"""Domain primitives: scalar aliases.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

type AccountId = str
type Username = str
type RegionCode = str  # ISO 3166-1 alpha-2, e.g. "US"
type RawPhoneNumber = str
type EmailAddress = str
type PhoneNumber = str  # E.164, e.g. "+15551234567"
