"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from keycache.shared.telemetry.logging import (
    get_logger,
    install_null_handler,
    setup_logging,
)
from keycache.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    get_tracer,
    set_telemetry,
)
from keycache.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    set_span_error,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "install_null_handler",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "get_tracer",
    "traced",
    "add_span_attributes",
    "set_span_error",
    "TracedOperation",
]
