"""Hand-written directory fakes for matcher and folder tests."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from rolodex.domain.model import DirectoryMatch, LookupKey

if TYPE_CHECKING:
    from collections.abc import Mapping


class RecordingDirectory:
    """Directory port fake that records every query it receives.

    ``answer_unrequested`` returns all configured matches regardless of the
    requested keys, simulating a misbehaving backend.
    """

    def __init__(
        self,
        matches: Mapping[LookupKey, DirectoryMatch] | None = None,
        *,
        error: Exception | None = None,
        delay: float | None = None,
        answer_unrequested: bool = False,
        response: object = None,
    ) -> None:
        self._matches = dict(matches or {})
        self._error = error
        self._delay = delay
        self._answer_unrequested = answer_unrequested
        self._response = response
        self.calls: list[frozenset[LookupKey]] = []
        self.cancelled = False

    async def find_accounts_by_identifiers(
        self,
        keys: frozenset[LookupKey],
    ) -> Mapping[LookupKey, DirectoryMatch]:
        self.calls.append(keys)
        if self._delay is not None:
            try:
                await asyncio.sleep(self._delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self._error is not None:
            raise self._error
        if self._response is not None:
            return self._response  # type: ignore[return-value]
        if self._answer_unrequested:
            return dict(self._matches)
        return {key: match for key, match in self._matches.items() if key in keys}


def phone_key(value: str) -> LookupKey:
    return LookupKey.parse(f"p:{value}")


def email_key(value: str) -> LookupKey:
    return LookupKey.parse(f"e:{value}")
