"""Span exporter selection and telemetry lifecycle."""

from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from coop_portal.core.config import get_settings
from coop_portal.shared.telemetry.telemetry import TelemetryConfig, build_exporter


def test_exporter_selection() -> None:
    assert build_exporter("none") is None
    assert isinstance(build_exporter("console"), ConsoleSpanExporter)
    assert isinstance(
        build_exporter("otlp", "http://collector:4317"), OTLPSpanExporter
    )


def test_unusable_exporter_falls_back_to_console() -> None:
    assert isinstance(build_exporter("otlp"), ConsoleSpanExporter)
    assert isinstance(build_exporter("zipkin"), ConsoleSpanExporter)


def test_config_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("TELEMETRY_EXPORTER", "none")
    monkeypatch.setenv("TELEMETRY_SAMPLE_RATE", "0.25")
    telemetry = TelemetryConfig.from_settings(get_settings())
    assert telemetry.service_name == "coop-portal"
    assert telemetry.exporter == "none"
    assert telemetry.sample_rate == 0.25
    assert not telemetry.active


def test_shutdown_before_setup_is_noop() -> None:
    telemetry = TelemetryConfig("coop-portal", "1.0.0", exporter="none")
    telemetry.shutdown()
    assert not telemetry.active
