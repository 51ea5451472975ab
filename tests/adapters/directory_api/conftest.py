"""Shared fixtures for directory service client tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from rolodex.adapters.directory_api import DirectoryApiClient
from rolodex.adapters.http_resilience import ResilientClient
from rolodex.config.directory import DirectoryApiConfig
from rolodex.config.http_resilience import ResilienceConfig, RetryPolicy
from tests.helpers.directory_service import BASE_URL

if TYPE_CHECKING:
    from collections.abc import Callable

type Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client() -> Callable[..., DirectoryApiClient]:
    def factory(handler: Handler, *, chunk_size: int = 500) -> DirectoryApiClient:
        transport = httpx.MockTransport(handler)
        config = DirectoryApiConfig(
            resilience=ResilienceConfig(
                name="directory-test",
                base_url=BASE_URL,
                retry=RetryPolicy(total=0),
            ),
            chunk_size=chunk_size,
        )
        return DirectoryApiClient(
            config=config,
            client_factory=lambda resilience: ResilientClient(resilience, transport=transport),
        )

    return factory
