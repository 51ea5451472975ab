from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest

from rolodex.adapters.directory_api import DirectoryApiClient, DirectoryApiError
from rolodex.config import ConfigurationError
from rolodex.config.directory import DirectoryApiConfig
from rolodex.config.http_resilience import ResilienceConfig
from rolodex.domain.model import DirectoryMatch
from rolodex.domain.ports.directory import DirectoryUnavailableError
from tests.helpers.directories import email_key, phone_key
from tests.helpers.directory_service import BASE_URL, RecordingHandler

if TYPE_CHECKING:
    from collections.abc import Callable

ANN_PHONE = phone_key("+15551234567")
ANN_EMAIL = email_key("ann@example.org")


def test_lookup_posts_keys_and_maps_matches(
    make_client: Callable[..., DirectoryApiClient],
) -> None:
    seen: list[httpx.Request] = []
    handler = RecordingHandler({("phone", "+15551234567"): "ann"})

    def capture(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = make_client(capture)
    matches = asyncio.run(
        client.find_accounts_by_identifiers(frozenset({ANN_PHONE, ANN_EMAIL}))
    )

    assert matches == {ANN_PHONE: DirectoryMatch(account_id="ann", canonical="+15551234567")}
    assert seen[0].method == "POST"
    assert str(seen[0].url) == f"{BASE_URL}/lookup"
    assert handler.requests == [
        {
            "keys": [
                {"kind": "email", "value": "ann@example.org"},
                {"kind": "phone", "value": "+15551234567"},
            ]
        }
    ]


def test_keys_are_sent_in_chunks(make_client: Callable[..., DirectoryApiClient]) -> None:
    keys = frozenset(phone_key(f"+1555000{index:04d}") for index in range(5))
    handler = RecordingHandler({("phone", "+15550000004"): "zed"})
    client = make_client(handler, chunk_size=2)

    matches = asyncio.run(client.find_accounts_by_identifiers(keys))

    assert [len(request["keys"]) for request in handler.requests] == [2, 2, 1]
    assert set(matches) == {phone_key("+15550000004")}


def test_empty_lookup_makes_no_request(make_client: Callable[..., DirectoryApiClient]) -> None:
    handler = RecordingHandler()

    assert asyncio.run(make_client(handler).find_accounts_by_identifiers(frozenset())) == {}
    assert handler.requests == []


def test_http_errors_raise_directory_api_error(
    make_client: Callable[..., DirectoryApiClient],
) -> None:
    client = make_client(lambda _request: httpx.Response(500, json={"error": "boom"}))

    with pytest.raises(DirectoryApiError) as exc:
        asyncio.run(client.find_accounts_by_identifiers(frozenset({ANN_EMAIL})))

    assert exc.value.status_code == 500
    assert isinstance(exc.value, DirectoryUnavailableError)


def test_transport_errors_raise_directory_api_error(
    make_client: Callable[..., DirectoryApiClient],
) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DirectoryApiError, match="unreachable"):
        asyncio.run(make_client(refuse).find_accounts_by_identifiers(frozenset({ANN_EMAIL})))


@pytest.mark.parametrize(
    "payload",
    [
        {"matches": [{"kind": "email", "value": "ann@example.org"}]},
        {"matches": [{"kind": "fax", "value": "123", "account_id": "ann"}]},
        {"matches": [{"kind": "email", "value": "ann@example.org", "account_id": ""}]},
        {"matches": "ann"},
    ],
)
def test_malformed_payloads_raise(
    make_client: Callable[..., DirectoryApiClient],
    payload: dict[str, object],
) -> None:
    client = make_client(lambda _request: httpx.Response(200, json=payload))

    with pytest.raises(DirectoryApiError, match="Malformed"):
        asyncio.run(client.find_accounts_by_identifiers(frozenset({ANN_EMAIL})))


def test_non_json_body_is_malformed(make_client: Callable[..., DirectoryApiClient]) -> None:
    client = make_client(lambda _request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(DirectoryApiError, match="Malformed"):
        asyncio.run(client.find_accounts_by_identifiers(frozenset({ANN_EMAIL})))


def test_answers_for_unrequested_keys_are_rejected(
    make_client: Callable[..., DirectoryApiClient],
) -> None:
    payload = {"matches": [{"kind": "email", "value": "bob@example.org", "account_id": "bob"}]}
    client = make_client(lambda _request: httpx.Response(200, json=payload))

    with pytest.raises(DirectoryApiError, match="not asked about"):
        asyncio.run(client.find_accounts_by_identifiers(frozenset({ANN_EMAIL})))


def test_canonical_value_from_service_is_kept(
    make_client: Callable[..., DirectoryApiClient],
) -> None:
    payload = {
        "matches": [
            {
                "kind": "email",
                "value": "ann@example.org",
                "account_id": "ann",
                "canonical": "ann@example.org",
                "score": 1,
            }
        ]
    }
    client = make_client(lambda _request: httpx.Response(200, json=payload))

    matches = asyncio.run(client.find_accounts_by_identifiers(frozenset({ANN_EMAIL})))

    assert matches == {ANN_EMAIL: DirectoryMatch(account_id="ann", canonical="ann@example.org")}


def test_missing_base_url_is_rejected() -> None:
    config = DirectoryApiConfig(resilience=ResilienceConfig(name="directory"))

    with pytest.raises(ConfigurationError, match="base_url"):
        DirectoryApiClient(config=config)
