"""Relay telemetry - OpenTelemetry-based observability."""

from .instrumentation import (
    instrument_run,
    instrument_tool_call,
    record_run_result,
    record_tool_result,
)
from .metrics import MetricLabels, RelayMetrics
from .setup import get_metrics, get_telemetry, reset_telemetry, setup_telemetry

__all__ = [
    # Metrics
    "RelayMetrics",
    "MetricLabels",
    # Setup
    "setup_telemetry",
    "get_telemetry",
    "get_metrics",
    "reset_telemetry",
    # Instrumentation
    "instrument_run",
    "instrument_tool_call",
    "record_tool_result",
    "record_run_result",
]
