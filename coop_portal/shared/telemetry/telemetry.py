"""OpenTelemetry setup for the search service.

Spans come from three places: FastAPI requests, one SQLAlchemy span per
category query, and the global_search.search span around each fan-out.
Exporters: console (development), otlp (gRPC collector) or none.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

if TYPE_CHECKING:
    from coop_portal.core.config import Settings

logger = logging.getLogger(__name__)

# Liveness/readiness probes are polled constantly and carry no search work.
_UNTRACED_URLS = "/api/v1/health"


def build_exporter(kind: str, otlp_endpoint: str | None = None) -> SpanExporter | None:
    """Span exporter for TELEMETRY_EXPORTER; None for "none".

    "otlp" without an endpoint, and unknown kinds, fall back to console.
    """
    if kind == "none":
        return None
    if kind == "otlp" and otlp_endpoint:
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if kind != "console":
        logger.warning("Unusable span exporter %r, falling back to console", kind)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus FastAPI and SQLAlchemy instrumentation.

    Build with from_settings(); call setup() once at startup and
    shutdown() on exit.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
        exporter: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.exporter = exporter
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> TelemetryConfig:
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
            exporter=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    @property
    def active(self) -> bool:
        return self.tracer_provider is not None

    def setup(self) -> TracerProvider | None:
        """Create the tracer provider and install it globally.

        Returns None (telemetry stays off) if the SDK fails to initialize;
        search must keep working without traces.
        """
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=ParentBased(TraceIdRatioBased(self.sample_rate)),
            )
            exporter = build_exporter(self.exporter, self.otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Failed to initialize telemetry")
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing %s %s (exporter=%s, sample_rate=%s)",
            self.service_name,
            self.service_version,
            self.exporter,
            self.sample_rate,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        if not self.active:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app,
                tracer_provider=self.tracer_provider,
                excluded_urls=_UNTRACED_URLS,
            )
        except Exception:
            logger.exception("Failed to instrument FastAPI")

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """One span per category query issued during a search."""
        if not self.active:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
            )
        except Exception:
            logger.exception("Failed to instrument SQLAlchemy")

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if not self.active:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry instance (set at startup)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set (or clear, with None) the process telemetry instance."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
