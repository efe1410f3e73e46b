"""Tests for FrankfurterClient.

Uses httpx.MockTransport so no network access is needed.
"""

from __future__ import annotations

import asyncio
import datetime as dt
from typing import Any

import httpx
import pytest

from formulary.rates import FrankfurterClient, RateFetchError

BASE_URL = "https://rates.test"

LATEST_PAYLOAD = {
    "amount": 1.0,
    "base": "USD",
    "date": "2024-05-03",
    "rates": {"EUR": 0.9287, "GBP": 0.7971, "JPY": 152.88},
}


def _client(handler: Any, max_retries: int = 1) -> FrankfurterClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FrankfurterClient(base_url=BASE_URL, max_retries=max_retries, http_client=http_client)


class TestFrankfurterClientRequests:
    """Tests for request paths and query parameters."""

    def test_latest(self) -> None:
        """Latest rates hit /latest with amount and from."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=LATEST_PAYLOAD)

        data = asyncio.run(_client(handler).fetch_latest("usd", 100))

        assert data == LATEST_PAYLOAD
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/latest"
        assert seen[0].url.params["from"] == "USD"
        assert seen[0].url.params["amount"] == "100"

    def test_historical(self) -> None:
        """Historical lookups put the ISO date in the path."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={**LATEST_PAYLOAD, "date": "2020-01-02"})

        asyncio.run(_client(handler).fetch_historical(dt.date(2020, 1, 2), "eur", "usd", 2.5))

        assert seen[0].url.path == "/2020-01-02"
        assert seen[0].url.params["from"] == "EUR"
        assert seen[0].url.params["to"] == "USD"
        assert seen[0].url.params["amount"] == "2.5"

    def test_trend(self) -> None:
        """Date ranges use START..END in the path."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"amount": 1.0, "base": "USD", "rates": {}})

        asyncio.run(_client(handler).fetch_trend("2024-01-01", "2024-01-31", "usd", "eur"))

        assert seen[0].url.path == "/2024-01-01..2024-01-31"
        assert dict(seen[0].url.params) == {"from": "USD", "to": "EUR"}

    def test_invalid_date_string(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=LATEST_PAYLOAD)

        with pytest.raises(ValueError):
            asyncio.run(_client(handler).fetch_historical("yesterday", "USD", "EUR"))

    def test_base_url_trailing_slash_stripped(self) -> None:
        assert FrankfurterClient(base_url=f"{BASE_URL}/").base_url == BASE_URL


class TestFrankfurterClientErrors:
    """Tests for retries and error reporting."""

    def test_retries_then_succeeds(self) -> None:
        """A transient 503 is retried."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                return httpx.Response(503)
            return httpx.Response(200, json=LATEST_PAYLOAD)

        data = asyncio.run(_client(handler, max_retries=1).fetch_latest("USD"))

        assert data["base"] == "USD"
        assert calls == 2

    def test_persistent_http_error(self) -> None:
        """After all attempts the last status code is reported."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(503)

        with pytest.raises(RateFetchError) as exc_info:
            asyncio.run(_client(handler, max_retries=2).fetch_latest("USD"))

        assert calls == 3
        assert exc_info.value.status_code == 503
        assert "3 attempts" in str(exc_info.value)

    @pytest.mark.parametrize("status", [400, 404, 422])
    def test_client_error_is_not_retried(self, status: int) -> None:
        """A 4xx is a rejected request; it fails on the first attempt with its status."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(status, json={"message": "not found"})

        with pytest.raises(RateFetchError) as exc_info:
            client = _client(handler, max_retries=3)
            asyncio.run(client.fetch_historical("1900-01-01", "USD", "EUR"))

        assert calls == 1
        assert exc_info.value.status_code == status

    def test_transport_error_is_retried(self) -> None:
        """A dropped connection is retried like a 5xx."""
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise httpx.ConnectError("connection reset", request=request)
            return httpx.Response(200, json=LATEST_PAYLOAD)

        data = asyncio.run(_client(handler, max_retries=1).fetch_latest("USD"))

        assert data["base"] == "USD"
        assert calls == 2

    def test_transport_error(self) -> None:
        """Connection failures surface as RateFetchError without a status."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RateFetchError) as exc_info:
            asyncio.run(_client(handler, max_retries=0).fetch_latest("USD"))

        assert exc_info.value.status_code is None

    def test_malformed_json_not_retried(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(200, content=b"<html>maintenance</html>")

        with pytest.raises(RateFetchError, match="Malformed"):
            asyncio.run(_client(handler, max_retries=3).fetch_latest("USD"))

        assert calls == 1

    def test_non_object_payload(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[1, 2, 3])

        with pytest.raises(RateFetchError, match="Unexpected"):
            asyncio.run(_client(handler).fetch_latest("USD"))
