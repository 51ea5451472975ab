"""HTTP client for a remote account directory service."""

from __future__ import annotations

import logging
from itertools import batched
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from rolodex.adapters.http_resilience import ResilientClient
from rolodex.config.env import ConfigurationError
from rolodex.domain.model import DirectoryMatch, LookupKey
from rolodex.domain.ports.directory import DirectoryUnavailableError

from .schema import KeyPayload, LookupRequest, LookupResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from rolodex.config.directory import DirectoryApiConfig
    from rolodex.config.http_resilience import ResilienceConfig

log = logging.getLogger(__name__)

LOOKUP_PATH = "lookup"


class DirectoryApiError(DirectoryUnavailableError):
    """Raised when the directory service fails or answers with an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DirectoryApiClient:
    """Directory port backed by ``POST {base_url}/lookup``.

    Keys are sent in chunks of ``config.chunk_size``; a failure in any chunk fails
    the whole lookup.
    """

    def __init__(
        self,
        *,
        config: DirectoryApiConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        if config.resilience.base_url is None:
            raise ConfigurationError("Missing directory base_url in resilience configuration")
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def find_accounts_by_identifiers(
        self,
        keys: frozenset[LookupKey],
    ) -> dict[LookupKey, DirectoryMatch]:
        matches: dict[LookupKey, DirectoryMatch] = {}
        if not keys:
            return matches

        async with self._client_factory(self._resilience) as client:
            for chunk in batched(sorted(keys), self._config.chunk_size):
                response = await self._lookup_chunk(client, chunk)
                _merge_chunk(matches, frozenset(chunk), response)

        log.debug("Directory service matched %s of %s keys", len(matches), len(keys))
        return matches

    async def _lookup_chunk(
        self,
        client: ResilientClient,
        chunk: tuple[LookupKey, ...],
    ) -> LookupResponse:
        request = LookupRequest(
            keys=[KeyPayload(kind=key.kind, value=key.value) for key in chunk],
        )
        try:
            response = await client.post(LOOKUP_PATH, json=request.model_dump(mode="json"))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            log.warning("Directory service returned HTTP %s", status)
            raise DirectoryApiError(
                f"Directory service returned HTTP {status}", status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            log.warning("Directory service request failed: %s", exc)
            raise DirectoryApiError(f"Directory service unreachable: {exc}") from exc

        try:
            return LookupResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DirectoryApiError(
                f"Malformed directory response: {exc.error_count()} validation errors",
                status_code=response.status_code,
            ) from exc


def _merge_chunk(
    matches: dict[LookupKey, DirectoryMatch],
    chunk: frozenset[LookupKey],
    response: LookupResponse,
) -> None:
    for payload in response.matches:
        key = LookupKey(kind=payload.kind, value=payload.value)
        if key not in chunk:
            raise DirectoryApiError(f"Directory answered for a key it was not asked about: {key}")
        existing = matches.get(key)
        if existing is not None and existing.account_id != payload.account_id:
            raise DirectoryApiError(
                f"{key} is claimed by {existing.account_id} and {payload.account_id}"
            )
        matches[key] = DirectoryMatch(
            account_id=payload.account_id,
            canonical=payload.canonical or payload.value,
        )
