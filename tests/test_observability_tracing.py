"""Tests for Formulary OpenTelemetry tracing.

Covers:
- Tracing OFF by default, ON via FORMULARY_OTEL_ENABLED=1
- Fail-closed only when FORMULARY_REQUIRE_OTEL=1 and init fails
- Outbound rate requests emit "rates.fetch" spans
- Tests use the in-memory exporter (no external collector required)
"""

from __future__ import annotations

import asyncio
import os
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from formulary.observability import tracing
from formulary.observability.tracing import (
    TracingConfigError,
    clear_test_spans,
    configure_tracing,
    get_current_trace_id,
    get_test_spans,
    reset_tracing,
)
from formulary.rates import FrankfurterClient, RateFetchError

TRACING_ENV_VARS = [
    "FORMULARY_OTEL_ENABLED",
    "FORMULARY_REQUIRE_OTEL",
    "FORMULARY_OTEL_SERVICE_NAME",
    "FORMULARY_OTEL_EXPORTER",
    "FORMULARY_OTEL_TEST_CAPTURE",
    "FORMULARY_OTEL_EXPORTER_OTLP_ENDPOINT",
]


@pytest.fixture(autouse=True)
def reset_tracing_env() -> Any:
    """Reset tracing environment and state before each test."""
    original_env = {k: os.environ.get(k) for k in TRACING_ENV_VARS}

    for k in TRACING_ENV_VARS:
        os.environ.pop(k, None)

    reset_tracing()

    yield

    for k in TRACING_ENV_VARS:
        os.environ.pop(k, None)

    for k, v in original_env.items():
        if v is not None:
            os.environ[k] = v

    reset_tracing()


def _enable_capture() -> None:
    os.environ["FORMULARY_OTEL_ENABLED"] = "1"
    os.environ["FORMULARY_OTEL_TEST_CAPTURE"] = "1"
    assert configure_tracing() is True
    clear_test_spans()


def _client(status_code: int) -> FrankfurterClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if status_code != 200:
            return httpx.Response(status_code)
        return httpx.Response(
            200, json={"amount": 1.0, "base": "USD", "date": "2024-05-03", "rates": {}}
        )

    return FrankfurterClient(
        base_url="https://rates.test",
        max_retries=0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestTracingConfiguration:
    """Tests for tracing configuration behavior."""

    def test_tracing_disabled_by_default(self) -> None:
        """Tracing should be OFF when FORMULARY_OTEL_ENABLED is not set."""
        assert configure_tracing() is False
        assert get_test_spans() == []

    def test_tracing_enabled_with_env_var(self) -> None:
        """Tracing should be ON when FORMULARY_OTEL_ENABLED=1."""
        os.environ["FORMULARY_OTEL_ENABLED"] = "1"
        os.environ["FORMULARY_OTEL_TEST_CAPTURE"] = "1"

        assert configure_tracing() is True

    def test_tracing_idempotent(self) -> None:
        """configure_tracing() should be idempotent."""
        os.environ["FORMULARY_OTEL_ENABLED"] = "1"
        os.environ["FORMULARY_OTEL_TEST_CAPTURE"] = "1"

        assert configure_tracing() == configure_tracing()

    def test_require_otel_fails_closed(self) -> None:
        """FORMULARY_REQUIRE_OTEL=1 should fail startup if tracing init fails."""
        os.environ["FORMULARY_OTEL_ENABLED"] = "1"
        os.environ["FORMULARY_REQUIRE_OTEL"] = "1"

        with patch(
            "opentelemetry.sdk.trace.TracerProvider",
            side_effect=Exception("Simulated init failure"),
        ):
            tracing._is_configured = False

            with pytest.raises(TracingConfigError) as exc_info:
                tracing.configure_tracing()

            assert "configuration failed" in str(exc_info.value).lower()

    def test_init_failure_without_require_is_soft(self) -> None:
        """Without FORMULARY_REQUIRE_OTEL an init failure only disables tracing."""
        os.environ["FORMULARY_OTEL_ENABLED"] = "1"

        with patch(
            "opentelemetry.sdk.trace.TracerProvider",
            side_effect=Exception("Simulated init failure"),
        ):
            tracing._is_configured = False

            assert tracing.configure_tracing() is False

    def test_no_trace_id_outside_span(self) -> None:
        assert get_current_trace_id() is None


class TestRateFetchSpans:
    """Tests for spans around outbound rate requests."""

    def test_successful_fetch_span(self) -> None:
        """A rate request emits a rates.fetch span with HTTP attributes."""
        _enable_capture()

        asyncio.run(_client(200).fetch_latest("USD"))

        spans = [s for s in get_test_spans() if s.name == "rates.fetch"]
        assert len(spans) == 1
        attrs = dict(spans[0].attributes or {})
        assert attrs["formulary.rate_kind"] == "latest"
        assert attrs["http.method"] == "GET"
        assert attrs["http.url"] == "https://rates.test/latest"
        assert attrs["http.status_code"] == 200

    def test_failed_fetch_marks_span_error(self) -> None:
        """A failed request sets ERROR status and records the exception."""
        _enable_capture()

        with pytest.raises(RateFetchError):
            asyncio.run(_client(502).fetch_latest("USD"))

        spans = [s for s in get_test_spans() if s.name == "rates.fetch"]
        assert len(spans) == 1
        assert spans[0].status.status_code.name == "ERROR"
        assert any(event.name == "exception" for event in spans[0].events)

    def test_trace_id_inside_span(self) -> None:
        """The current trace id is a 32-char hex string inside a span."""
        _enable_capture()

        from opentelemetry import trace

        with trace.get_tracer("test").start_as_current_span("outer"):
            trace_id = get_current_trace_id()

        assert trace_id is not None
        assert len(trace_id) == 32
