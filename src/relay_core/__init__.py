"""Relay Core - tool execution relay.

Runs a bounded set of catalogued remote tools for a natural-language task,
builds each call's arguments, invokes the tools over JSON-RPC or REST and
consolidates the outcomes into one execution report.
"""

from relay_core.application import RelayApplication
from relay_core.orchestrator import ExecutionOrchestrator, ExecutionReport, ToolInvocationResult

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "RelayApplication",
    "ExecutionOrchestrator",
    "ExecutionReport",
    "ToolInvocationResult",
]
