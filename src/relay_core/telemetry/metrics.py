"""Relay metrics schema - OpenTelemetry conventions.

Metrics:
- Counters: runs and tool invocations
- Histograms: run and tool invocation durations
- Gauges: active runs, catalog size

Labels/Attributes:
- agent_name: Agent the run belongs to
- tool_name: Catalog tool name
- category: Tool category (transport)
- status: success | error (tools), completed | failed (runs)
- error_code: Relay error code when status=error

All metrics use the 'relay_' prefix.
"""

from dataclasses import dataclass

from opentelemetry import metrics
from opentelemetry.metrics import Counter, Histogram, UpDownCounter

METRIC_PREFIX = "relay"


@dataclass
class MetricLabels:
    """Standard metric labels/attributes."""

    AGENT_NAME = "agent_name"
    TOOL_NAME = "tool_name"
    CATEGORY = "category"
    STATUS = "status"
    ERROR_CODE = "error_code"
    TIER = "tier"

    # Status values
    STATUS_SUCCESS = "success"
    STATUS_ERROR = "error"
    STATUS_COMPLETED = "completed"
    STATUS_FAILED = "failed"


class RelayMetrics:
    """Relay metrics collection."""

    def __init__(self, meter: metrics.Meter):
        """Initialize metrics.

        Args:
            meter: OpenTelemetry Meter instance
        """
        self._meter = meter
        self._setup_counters()
        self._setup_histograms()
        self._setup_gauges()

        # Current value behind the catalog UpDownCounter, to compute deltas
        self._current_catalog_tools = 0

    def _setup_counters(self) -> None:
        self.runs_total: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_runs_total",
            description="Total number of task runs",
            unit="1",
        )
        self.tool_invocations_total: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_tool_invocations_total",
            description="Total number of tool invocations",
            unit="1",
        )
        self.argument_inferences_total: Counter = self._meter.create_counter(
            name=f"{METRIC_PREFIX}_argument_inferences_total",
            description="Tool call arguments built, by inference tier",
            unit="1",
        )

    def _setup_histograms(self) -> None:
        self.run_duration_seconds: Histogram = self._meter.create_histogram(
            name=f"{METRIC_PREFIX}_run_duration_seconds",
            description="Task run duration in seconds",
            unit="s",
        )
        self.tool_invocation_duration_seconds: Histogram = self._meter.create_histogram(
            name=f"{METRIC_PREFIX}_tool_invocation_duration_seconds",
            description="Tool invocation duration in seconds",
            unit="s",
        )

    def _setup_gauges(self) -> None:
        self.active_runs: UpDownCounter = self._meter.create_up_down_counter(
            name=f"{METRIC_PREFIX}_active_runs",
            description="Number of task runs in progress",
            unit="1",
        )
        self.catalog_tools: UpDownCounter = self._meter.create_up_down_counter(
            name=f"{METRIC_PREFIX}_catalog_tools",
            description="Number of tools in the catalog",
            unit="1",
        )

    def record_run_start(self, agent_name: str) -> None:
        self.active_runs.add(1, {MetricLabels.AGENT_NAME: agent_name})

    def record_run_end(self, agent_name: str, duration_seconds: float, status: str) -> None:
        """Record run completion.

        Args:
            agent_name: Agent name
            duration_seconds: Run duration
            status: completed | failed
        """
        labels = {MetricLabels.AGENT_NAME: agent_name, MetricLabels.STATUS: status}
        self.active_runs.add(-1, {MetricLabels.AGENT_NAME: agent_name})
        self.runs_total.add(1, labels)
        self.run_duration_seconds.record(duration_seconds, labels)

    def record_tool_invocation(
        self,
        tool_name: str,
        duration_seconds: float,
        status: str,
        category: str | None = None,
        error_code: str | None = None,
    ) -> None:
        """Record one tool invocation.

        Args:
            tool_name: Catalog tool name
            duration_seconds: Invocation duration
            status: success | error
            category: Tool category
            error_code: Relay error code when status is error
        """
        labels = {MetricLabels.TOOL_NAME: tool_name, MetricLabels.STATUS: status}
        if category:
            labels[MetricLabels.CATEGORY] = category
        if error_code:
            labels[MetricLabels.ERROR_CODE] = error_code

        self.tool_invocations_total.add(1, labels)
        self.tool_invocation_duration_seconds.record(
            duration_seconds,
            {MetricLabels.TOOL_NAME: tool_name, MetricLabels.STATUS: status},
        )

    def record_argument_tier(self, tool_name: str, tier: str) -> None:
        self.argument_inferences_total.add(
            1, {MetricLabels.TOOL_NAME: tool_name, MetricLabels.TIER: tier}
        )

    def set_catalog_size(self, count: int) -> None:
        """Set the catalog size gauge."""
        delta = count - self._current_catalog_tools
        if delta:
            self.catalog_tools.add(delta)
        self._current_catalog_tools = count
