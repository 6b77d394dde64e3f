"""OpenTelemetry tracing configuration.

Exports cache spans to the console or an OTLP collector. Tracing is off
unless setup_telemetry() is called with telemetry enabled; until then the
API's no-op tracer is used.
"""

import logging
import threading

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from keycache.core.config import Settings

logger = logging.getLogger(__name__)


class TelemetryConfig:
    """OpenTelemetry configuration for cache tracing.

    Exporters: console, otlp, or none.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.exporter_type = exporter_type
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "TelemetryConfig":
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=settings.telemetry_enabled,
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    def _build_exporter(
        self, exporter_type: str, otlp_endpoint: str | None
    ) -> SpanExporter | None:
        if exporter_type == "console":
            return ConsoleSpanExporter()
        if exporter_type == "otlp":
            return OTLPSpanExporter(endpoint=otlp_endpoint or "http://localhost:4317")
        return None

    def setup_telemetry(
        self,
        exporter_type: str | None = None,
        otlp_endpoint: str | None = None,
        sample_rate: float | None = None,
    ) -> TracerProvider | None:
        """Install a TracerProvider as the global provider.

        Arguments left as None fall back to the values this config was
        built with (from_settings reads them from TELEMETRY_* settings).

        Args:
            exporter_type: "console", "otlp", or "none".
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://localhost:4317).
            sample_rate: Sampling rate 0.0-1.0.

        Returns:
            TracerProvider or None if disabled.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        exporter_type = exporter_type or self.exporter_type
        otlp_endpoint = otlp_endpoint or self.otlp_endpoint
        if sample_rate is None:
            sample_rate = self.sample_rate
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
            }
        )
        provider = TracerProvider(
            resource=resource, sampler=TraceIdRatioBased(sample_rate)
        )
        exporter = self._build_exporter(exporter_type, otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "Telemetry enabled: exporter=%s sample_rate=%s", exporter_type, sample_rate
        )
        return provider

    def shutdown(self) -> None:
        """Flush pending spans and stop exporters."""
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
            self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.Lock()


def set_telemetry(config: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = config


def get_telemetry() -> TelemetryConfig | None:
    with _telemetry_lock:
        return _telemetry


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer from the global provider (no-op until configured)."""
    return trace.get_tracer(name)
