"""Formulary observability module.

Provides opt-in OpenTelemetry tracing for outbound rate requests.
"""

from formulary.observability.tracing import (
    TracingConfigError,
    configure_tracing,
    get_current_trace_id,
)

__all__ = ["TracingConfigError", "configure_tracing", "get_current_trace_id"]
