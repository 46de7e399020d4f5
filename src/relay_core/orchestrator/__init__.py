"""Execution orchestrator."""

from .orchestrator import ExecutionOrchestrator, format_section
from .types import ExecutionReport, TaskRequest, ToolInvocationResult

__all__ = [
    "ExecutionOrchestrator",
    "ExecutionReport",
    "TaskRequest",
    "ToolInvocationResult",
    "format_section",
]
