"""Execution orchestrator types."""

from dataclasses import dataclass, field
from typing import Any

from relay_core.types import InvocationStatus, RunStatus


@dataclass
class TaskRequest:
    """A task to run against a bounded set of tools."""

    allowed_tools: list[str]
    query: str = ""
    inputs: dict[str, Any] = field(default_factory=dict)
    agent_name: str = "agent"


@dataclass(frozen=True)
class ToolInvocationResult:
    """Outcome of one tool call within a run.

    Failures are data: ``status`` is ERROR and ``output`` describes the
    failure; nothing is raised to the caller.
    """

    tool_name: str
    status: InvocationStatus
    output: Any
    duration_ms: int
    arguments: dict[str, Any] = field(default_factory=dict)
    error_code: str | None = None
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.status == InvocationStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool_name": self.tool_name,
            "status": self.status.value,
            "output": self.output,
            "duration_ms": self.duration_ms,
            "arguments": self.arguments,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


@dataclass
class ExecutionReport:
    """Consolidated outcome of one run."""

    agent_name: str
    status: RunStatus
    aggregated_text: str
    tool_results: list[ToolInvocationResult]
    total_duration_ms: int
    run_id: str = ""
    error: str | None = None

    @property
    def tools_used(self) -> list[str]:
        return [result.tool_name for result in self.tool_results]

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "agent_name": self.agent_name,
            "status": self.status.value,
            "result": self.aggregated_text,
            "tools_used": self.tools_used,
            "tool_results": [result.to_dict() for result in self.tool_results],
            "execution_time_ms": self.total_duration_ms,
            "error": self.error,
        }
