"""HTTP client for the Frankfurter exchange-rate API.

Endpoints (no API key required):
    GET /latest?amount=A&from=BASE
    GET /{YYYY-MM-DD}?amount=A&from=BASE&to=TARGET
    GET /{START}..{END}?from=BASE&to=TARGET
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any

import httpx
from opentelemetry import trace

from formulary.config import (
    DEFAULT_RATE_BASE_URL,
    DEFAULT_RATE_MAX_RETRIES,
    DEFAULT_RATE_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

USER_AGENT = "formulary-rates/1.0"


class RateFetchError(Exception):
    """Raised when a rate request is rejected or fails after all retries."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


def _format_amount(amount: float) -> str:
    return f"{amount:g}"


class FrankfurterClient:
    """Async client for latest, historical and date-range rate lookups.

    Each call returns the decoded JSON object; parsing into models is left to
    the caller. 5xx responses and transport errors are retried `max_retries`
    times before RateFetchError is raised; a 4xx fails on the first attempt.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_RATE_BASE_URL,
        timeout: float = DEFAULT_RATE_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_RATE_MAX_RETRIES,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, without trailing slash.
            timeout: Per-request timeout in seconds.
            max_retries: Extra attempts after the first failure.
            http_client: Optional httpx.AsyncClient for dependency injection (testing).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    async def fetch_latest(self, base: str, amount: float = 1) -> dict[str, Any]:
        return await self._make_request(
            kind="latest",
            path="/latest",
            params={"amount": _format_amount(amount), "from": base.upper()},
        )

    async def fetch_historical(
        self, date: dt.date | str, base: str, target: str, amount: float = 1
    ) -> dict[str, Any]:
        return await self._make_request(
            kind="historical",
            path=f"/{_iso(date)}",
            params={
                "amount": _format_amount(amount),
                "from": base.upper(),
                "to": target.upper(),
            },
        )

    async def fetch_trend(
        self, start: dt.date | str, end: dt.date | str, base: str, target: str
    ) -> dict[str, Any]:
        return await self._make_request(
            kind="trend",
            path=f"/{_iso(start)}..{_iso(end)}",
            params={"from": base.upper(), "to": target.upper()},
        )

    async def _make_request(
        self, *, kind: str, path: str, params: dict[str, str]
    ) -> dict[str, Any]:
        """Execute a GET request inside a "rates.fetch" span.

        Raises:
            RateFetchError: On persistent network or HTTP errors, or a
                non-object JSON body.
        """
        url = f"{self._base_url}{path}"
        tracer = trace.get_tracer("formulary.rates")
        with tracer.start_as_current_span(
            "rates.fetch",
            attributes={
                "formulary.rate_kind": kind,
                "http.method": "GET",
                "http.url": url,
            },
        ) as span:
            client = self._http_client
            should_close = False
            if client is None:
                client = httpx.AsyncClient(
                    timeout=self._timeout, headers={"User-Agent": USER_AGENT}
                )
                should_close = True
            try:
                return await self._execute_with_retries(
                    client=client, url=url, params=params, span=span
                )
            except RateFetchError as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise
            finally:
                if should_close:
                    await client.aclose()

    async def _execute_with_retries(
        self,
        *,
        client: httpx.AsyncClient,
        url: str,
        params: dict[str, str],
        span: trace.Span,
    ) -> dict[str, Any]:
        last_error: Exception | None = None
        last_status: int | None = None
        attempts = 1 + self._max_retries

        for attempt in range(attempts):
            try:
                response = await client.get(url, params=params)
                last_status = response.status_code
                span.set_attribute("http.status_code", response.status_code)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as exc:
                if exc.response.status_code < 500:
                    raise RateFetchError(
                        f"Rate request rejected by {url}: {exc}",
                        status_code=exc.response.status_code,
                    ) from exc
                last_error = exc
            except httpx.RequestError as exc:
                last_error = exc
            except ValueError as exc:
                raise RateFetchError(f"Malformed rate response from {url}: {exc}") from exc
            else:
                if not isinstance(data, dict):
                    raise RateFetchError(f"Unexpected rate payload from {url}")
                return data

            if attempt < attempts - 1:
                logger.debug("Retrying rate request %s after: %s", url, last_error)

        raise RateFetchError(
            f"Rate request failed after {attempts} attempts: {last_error}",
            status_code=last_status,
        )


def _iso(value: dt.date | str) -> str:
    if isinstance(value, dt.date):
        return value.isoformat()
    return dt.date.fromisoformat(value).isoformat()
