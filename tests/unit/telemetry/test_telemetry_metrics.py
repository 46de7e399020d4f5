"""Unit tests for relay telemetry setup and metrics."""

from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from relay_core.config.models import TelemetryConfig, TelemetryMetricsConfig, TelemetryTracingConfig
from relay_core.telemetry import (
    MetricLabels,
    RelayMetrics,
    get_metrics,
    get_telemetry,
    reset_telemetry,
    setup_telemetry,
)


def _collect(reader: InMemoryMetricReader) -> dict[str, list]:
    """Metric name -> data points."""
    points: dict[str, list] = {}
    data = reader.get_metrics_data()
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                points[metric.name] = list(metric.data.data_points)
    return points


def _metrics() -> tuple[RelayMetrics, InMemoryMetricReader]:
    reader = InMemoryMetricReader()
    provider = MeterProvider(metric_readers=[reader])
    return RelayMetrics(provider.get_meter("relay-test")), reader


class TestTelemetrySetup:
    """Tests for setup_telemetry."""

    def test_not_set_up(self):
        assert get_telemetry() is None
        assert get_metrics() is None

    def test_disabled(self):
        """Disabled telemetry yields no instruments."""
        telemetry = setup_telemetry(TelemetryConfig(enabled=False))
        assert telemetry["meter"] is None
        assert telemetry["metrics"] is None
        assert telemetry["tracer"] is None

    def test_metrics_without_tracing(self):
        config = TelemetryConfig(
            metrics=TelemetryMetricsConfig(enabled=True, prometheus_enabled=False),
            tracing=TelemetryTracingConfig(enabled=False),
        )
        telemetry = setup_telemetry(config)
        assert isinstance(telemetry["metrics"], RelayMetrics)
        assert telemetry["tracer"] is None
        assert get_metrics() is telemetry["metrics"]

    def test_idempotent(self):
        """Second setup call returns the first state."""
        first = setup_telemetry(TelemetryConfig(enabled=False))
        second = setup_telemetry(TelemetryConfig())
        assert first is second
        reset_telemetry()
        assert get_telemetry() is None

    def test_tracing_enabled(self):
        config = TelemetryConfig(
            metrics=TelemetryMetricsConfig(enabled=False),
            tracing=TelemetryTracingConfig(enabled=True, sample_rate=0.5),
        )
        telemetry = setup_telemetry(config)
        assert telemetry["tracer"] is not None
        assert telemetry["metrics"] is None


class TestRelayMetrics:
    """Tests for RelayMetrics recording."""

    def test_run_metrics(self):
        metrics, reader = _metrics()
        metrics.record_run_start("triage")
        metrics.record_run_end("triage", 0.5, MetricLabels.STATUS_COMPLETED)

        points = _collect(reader)

        runs = points["relay_runs_total"]
        assert runs[0].value == 1
        assert runs[0].attributes == {"agent_name": "triage", "status": "completed"}
        assert points["relay_active_runs"][0].value == 0

    def test_tool_metrics(self):
        metrics, reader = _metrics()
        metrics.record_tool_invocation(
            "t", 0.1, MetricLabels.STATUS_ERROR, category="jira", error_code="TOOL_TIMEOUT"
        )
        metrics.record_argument_tier("t", "heuristic")

        points = _collect(reader)

        invocation = points["relay_tool_invocations_total"][0]
        assert invocation.attributes["error_code"] == "TOOL_TIMEOUT"
        assert invocation.attributes["category"] == "jira"
        assert points["relay_argument_inferences_total"][0].attributes["tier"] == "heuristic"

    def test_catalog_size_gauge(self):
        """The gauge tracks absolute values through deltas."""
        metrics, reader = _metrics()
        metrics.set_catalog_size(25)
        metrics.set_catalog_size(27)
        metrics.set_catalog_size(27)

        assert _collect(reader)["relay_catalog_tools"][0].value == 27
