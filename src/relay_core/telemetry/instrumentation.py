"""Relay telemetry instrumentation helpers.

Provides context managers for:
- Task runs
- Tool invocations

Both are no-ops until setup_telemetry() has been called.
"""

import time
from contextlib import asynccontextmanager
from typing import Any

from opentelemetry.trace import Status, StatusCode

from .metrics import MetricLabels
from .setup import get_telemetry


def _instruments() -> tuple[Any, Any]:
    telemetry = get_telemetry()
    if not telemetry:
        return None, None
    return telemetry.get("tracer"), telemetry.get("metrics")


@asynccontextmanager
async def instrument_run(agent_name: str, run_id: str):
    """Context manager for instrumenting a task run.

    Records the active-run gauge, run counter and duration histogram, and a
    trace span for the run.

    Args:
        agent_name: Agent name
        run_id: Run identifier

    Yields:
        Dictionary to store the run status
    """
    tracer, metrics = _instruments()
    start_time = time.time()
    result: dict[str, Any] = {"status": MetricLabels.STATUS_COMPLETED}

    span = None
    if tracer:
        span = tracer.start_span(f"run:{agent_name}")
        span.set_attribute("run.id", run_id)
        span.set_attribute("agent.name", agent_name)

    if metrics:
        metrics.record_run_start(agent_name)

    try:
        yield result
    except Exception as e:
        result["status"] = MetricLabels.STATUS_FAILED
        if span:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
        raise
    finally:
        duration = time.time() - start_time
        if metrics:
            metrics.record_run_end(agent_name, duration, result["status"])
        if span:
            if result["status"] == MetricLabels.STATUS_COMPLETED:
                span.set_status(Status(StatusCode.OK))
            else:
                span.set_status(Status(StatusCode.ERROR, result.get("error") or ""))
            span.end()


@asynccontextmanager
async def instrument_tool_call(tool_name: str, category: str | None = None):
    """Context manager for instrumenting tool invocations.

    Records the tool invocation counter and duration histogram, and a trace
    span for the call.

    Args:
        tool_name: Catalog tool name
        category: Tool category

    Yields:
        Dictionary to store execution status
    """
    tracer, metrics = _instruments()
    start_time = time.time()
    result: dict[str, Any] = {"status": MetricLabels.STATUS_SUCCESS, "error_code": None}

    span = None
    if tracer:
        span = tracer.start_span(f"tool:{tool_name}")
        span.set_attribute("tool.name", tool_name)
        if category:
            span.set_attribute("tool.category", category)

    try:
        yield result
    except Exception as e:
        result["status"] = MetricLabels.STATUS_ERROR
        result["error_code"] = type(e).__name__
        if span:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
        raise
    finally:
        duration = time.time() - start_time

        if metrics:
            metrics.record_tool_invocation(
                tool_name=tool_name,
                duration_seconds=duration,
                status=result["status"],
                category=category,
                error_code=result.get("error_code"),
            )

        if span:
            if result["status"] == MetricLabels.STATUS_SUCCESS:
                span.set_status(Status(StatusCode.OK))
            else:
                span.set_attribute("error.code", result.get("error_code") or "")
            span.end()


def record_tool_result(
    result: dict[str, Any], success: bool, error_code: str | None = None
) -> None:
    """Update result dictionary with execution status.

    Args:
        result: Result dictionary from instrument_tool_call
        success: Whether execution succeeded
        error_code: Error code if failed
    """
    if success:
        result["status"] = MetricLabels.STATUS_SUCCESS
    else:
        result["status"] = MetricLabels.STATUS_ERROR
        result["error_code"] = error_code


def record_run_result(result: dict[str, Any], failed: bool, error: str | None = None) -> None:
    """Update result dictionary from instrument_run with the run outcome."""
    if failed:
        result["status"] = MetricLabels.STATUS_FAILED
        result["error"] = error
    else:
        result["status"] = MetricLabels.STATUS_COMPLETED
