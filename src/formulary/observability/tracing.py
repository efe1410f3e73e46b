"""OpenTelemetry tracing configuration for Formulary.

Tracing is off by default. When enabled, outbound exchange-rate requests
are recorded as "rates.fetch" spans; calculator evaluation is pure and
synchronous and is not traced.

Environment Variables:
    FORMULARY_OTEL_ENABLED: Set to "1" to enable tracing (default: disabled)
    FORMULARY_REQUIRE_OTEL: Set to "1" to raise if tracing cannot initialize
    FORMULARY_OTEL_SERVICE_NAME: Service name for spans (default: "formulary")
    FORMULARY_OTEL_EXPORTER: Exporter type - "console" or "otlp" (default: "console")
    FORMULARY_OTEL_EXPORTER_OTLP_ENDPOINT: OTLP/HTTP endpoint URL (optional)
    FORMULARY_OTEL_TEST_CAPTURE: Set to "1" to use in-memory exporter for tests
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor, TracerProvider

logger = logging.getLogger(__name__)

ENV_OTEL_ENABLED: Final[str] = "FORMULARY_OTEL_ENABLED"
ENV_REQUIRE_OTEL: Final[str] = "FORMULARY_REQUIRE_OTEL"
ENV_OTEL_SERVICE_NAME: Final[str] = "FORMULARY_OTEL_SERVICE_NAME"
ENV_OTEL_EXPORTER: Final[str] = "FORMULARY_OTEL_EXPORTER"
ENV_OTEL_ENDPOINT: Final[str] = "FORMULARY_OTEL_EXPORTER_OTLP_ENDPOINT"
ENV_OTEL_TEST_CAPTURE: Final[str] = "FORMULARY_OTEL_TEST_CAPTURE"

EXPORTERS: Final[frozenset[str]] = frozenset({"console", "otlp"})

_tracer_provider: TracerProvider | None = None
_is_configured: bool = False
_test_exporter: Any = None  # InMemorySpanExporter once test capture has run


class TracingConfigError(Exception):
    """Raised when tracing configuration fails and FORMULARY_REQUIRE_OTEL=1."""


def _flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class TracingSettings:
    """Tracing options read from the environment."""

    enabled: bool = False
    required: bool = False
    test_capture: bool = False
    service_name: str = "formulary"
    exporter: str = "console"
    endpoint: str | None = None

    @classmethod
    def from_env(cls) -> TracingSettings:
        return cls(
            enabled=_flag(ENV_OTEL_ENABLED),
            required=_flag(ENV_REQUIRE_OTEL),
            test_capture=_flag(ENV_OTEL_TEST_CAPTURE),
            service_name=os.environ.get(ENV_OTEL_SERVICE_NAME, "").strip() or "formulary",
            exporter=os.environ.get(ENV_OTEL_EXPORTER, "").strip().lower() or "console",
            endpoint=os.environ.get(ENV_OTEL_ENDPOINT, "").strip() or None,
        )


def _span_processor(settings: TracingSettings) -> SpanProcessor:
    """Build the processor/exporter pair for the configured exporter.

    The OTLP exporter needs the `otlp` extra installed.
    """
    global _test_exporter

    from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor

    if settings.test_capture:
        from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
            InMemorySpanExporter,
        )

        _test_exporter = InMemorySpanExporter()
        return SimpleSpanProcessor(_test_exporter)

    if settings.exporter not in EXPORTERS:
        raise TracingConfigError(
            f"{ENV_OTEL_EXPORTER} must be one of {sorted(EXPORTERS)}, got '{settings.exporter}'"
        )
    if settings.exporter == "otlp":
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

        otlp = OTLPSpanExporter(endpoint=settings.endpoint) if settings.endpoint else None
        return BatchSpanProcessor(otlp or OTLPSpanExporter())

    from opentelemetry.sdk.trace.export import ConsoleSpanExporter

    return SimpleSpanProcessor(ConsoleSpanExporter())


def configure_tracing() -> bool:
    """Install a global TracerProvider when FORMULARY_OTEL_ENABLED=1.

    Calling it again after a successful setup is a no-op.

    Returns:
        Whether spans are being recorded.

    Raises:
        TracingConfigError: If setup fails and FORMULARY_REQUIRE_OTEL=1.
    """
    global _tracer_provider, _is_configured

    settings = TracingSettings.from_env()
    if not settings.enabled:
        _is_configured = True
        logger.debug("Tracing disabled; %s is not set", ENV_OTEL_ENABLED)
        return False

    if settings.test_capture and _test_exporter is not None:
        return True
    if _is_configured and _tracer_provider is not None:
        return True
    _is_configured = True

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider

        provider = TracerProvider(resource=Resource.create({"service.name": settings.service_name}))
        provider.add_span_processor(_span_processor(settings))
        trace.set_tracer_provider(provider)
    except Exception as exc:
        logger.error("Tracing setup failed: %s", exc)
        if settings.required:
            raise TracingConfigError(
                f"Tracing is required but configuration failed: {exc}"
            ) from exc
        return False

    _tracer_provider = provider
    logger.info(
        "Tracing enabled for service %s (exporter: %s)",
        settings.service_name,
        "in-memory" if settings.test_capture else settings.exporter,
    )
    return True


def get_current_trace_id() -> str | None:
    """Trace id of the active span as 32 hex chars, for log correlation."""
    from opentelemetry import trace

    context = trace.get_current_span().get_span_context()
    return format(context.trace_id, "032x") if context.is_valid else None


def get_test_spans() -> list[ReadableSpan]:
    """Finished spans held by the in-memory exporter (empty without test capture)."""
    if _test_exporter is None:
        return []
    return list(_test_exporter.get_finished_spans())


def clear_test_spans() -> None:
    if _test_exporter is not None:
        _test_exporter.clear()


def reset_tracing() -> None:
    """Forget configuration state between tests.

    OpenTelemetry allows the global provider to be set only once per process,
    so the in-memory exporter survives and only its spans are dropped.
    """
    global _is_configured

    clear_test_spans()
    _is_configured = False
