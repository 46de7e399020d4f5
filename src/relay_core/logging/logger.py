"""Relay logger - component logging for catalog, transports and runs."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from relay_core.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from relay_core.types import LogFormat, LogLevel

COMPONENTS = ("run", "tool", "catalog", "transport", "inference", "config")


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_params: bool = True
    show_results: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stdout)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {name: True for name in COMPONENTS}


class RelayLogger:
    """Main logger facade. Creates run-scoped loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def run(self, run_id: str, agent_name: str) -> "RunLogger":
        """Get a logger scoped to one task run.

        Args:
            run_id: Run identifier
            agent_name: Name of the agent the run belongs to

        Returns:
            RunLogger instance
        """
        return RunLogger(self, run_id, agent_name)

    def configure(self, config: LogConfig) -> None:
        """Replace the configuration."""
        self.config = config

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _truncate(self, value: Any) -> str:
        text = value if isinstance(value, str) else str(value)
        if len(text) > self.config.truncate_at:
            text = text[: self.config.truncate_at] + "..."
        return text

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (run, tool, catalog, transport, inference, config)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "run": MAGENTA,
            "tool": GREEN,
            "catalog": CYAN,
            "transport": LIGHT_BLUE,
            "inference": ORANGE,
        }.get(component, RESET)

        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_params:
            output += f" {LIGHT_BLUE}{self._truncate(context)}{RESET}"

        print(output, file=self.config.output)


class RunLogger:
    """Logger for run-level events."""

    def __init__(self, parent: RelayLogger, run_id: str, agent_name: str):
        """Initialize run logger.

        Args:
            parent: Parent RelayLogger instance
            run_id: Run identifier
            agent_name: Agent name
        """
        self.parent = parent
        self.run_id = run_id
        self.agent_name = agent_name

    def _context(self, event: str, **extra: Any) -> dict[str, Any]:
        context: dict[str, Any] = {
            "run_id": self.run_id,
            "agent_name": self.agent_name,
            "event": event,
        }
        context.update(extra)
        return context

    def started(self, tool_count: int) -> None:
        """Log run start.

        Args:
            tool_count: Number of tool names the task allows
        """
        message = f"Run for '{self.agent_name}' started ({tool_count} tools allowed)"
        self.parent._log(
            LogLevel.INFO, "run", message, self._context("run_started", tool_count=tool_count)
        )

    def tool_skipped(self, tool_name: str) -> None:
        """Log a tool name that is not in the catalog."""
        message = f"Tool '{tool_name}' not in catalog, skipping"
        self.parent._log(
            LogLevel.DEBUG, "run", message, self._context("tool_skipped", tool_name=tool_name)
        )

    def completed(self, duration_ms: int, tool_count: int, error_count: int) -> None:
        """Log run completion with summary.

        Args:
            duration_ms: Run duration in milliseconds
            tool_count: Number of tools invoked
            error_count: Number of tools that returned an error
        """
        duration_s = duration_ms / 1000
        message = (
            f"Run for '{self.agent_name}' completed "
            f"({tool_count} tools, {error_count} errors, {duration_s:.2f}s) ✓"
        )
        context = self._context(
            "run_completed",
            duration_ms=duration_ms,
            tool_count=tool_count,
            error_count=error_count,
        )
        self.parent._log(LogLevel.INFO, "run", message, context)

    def failed(self, error: Exception, duration_ms: int) -> None:
        """Log run failure.

        Args:
            error: Exception that aborted the run
            duration_ms: Run duration in milliseconds
        """
        duration_s = duration_ms / 1000
        message = f"Run for '{self.agent_name}' failed ({duration_s:.2f}s): {error}"
        context = self._context(
            "run_failed",
            duration_ms=duration_ms,
            error=str(error),
            error_type=type(error).__name__,
        )
        self.parent._log(LogLevel.ERROR, "run", message, context)

    def tool(self, tool_name: str, category: str) -> "ToolCallLogger":
        """Get a logger for one tool invocation in this run.

        Args:
            tool_name: Catalog name of the tool
            category: Tool category

        Returns:
            ToolCallLogger instance
        """
        return ToolCallLogger(self, tool_name, category)


class ToolCallLogger:
    """Logger for a single tool invocation."""

    def __init__(self, parent: RunLogger, tool_name: str, category: str):
        self.parent = parent
        self.tool_name = tool_name
        self.category = category

    @property
    def root(self) -> RelayLogger:
        return self.parent.parent

    def _context(self, event: str, **extra: Any) -> dict[str, Any]:
        return self.parent._context(
            event, tool_name=self.tool_name, category=self.category, **extra
        )

    def arguments(self, tier: str, arguments: dict[str, Any]) -> None:
        """Log which inference tier produced the call arguments.

        Args:
            tier: "explicit", "generated" or "heuristic"
            arguments: Arguments that will be sent
        """
        context = self._context("arguments_built", tier=tier)
        if self.root.config.show_params:
            context["arguments"] = arguments
        message = f"Arguments for '{self.tool_name}' built ({tier})"
        self.root._log(LogLevel.DEBUG, "inference", message, context)

    def calling(self) -> None:
        """Log tool call start."""
        message = f"Calling tool '{self.tool_name}' ({self.category})"
        self.root._log(LogLevel.INFO, "tool", message, self._context("tool_calling"))

    def result(self, output: Any, duration_ms: int) -> None:
        """Log tool call result.

        Args:
            output: Normalized tool output
            duration_ms: Call duration in milliseconds
        """
        context = self._context("tool_result", duration_ms=duration_ms)
        if self.root.config.show_results:
            context["result"] = self.root._truncate(output)

        duration_s = duration_ms / 1000
        message = f"Tool '{self.tool_name}' completed ({duration_s:.2f}s) ✓"
        self.root._log(LogLevel.INFO, "tool", message, context)

    def error(self, error: str, duration_ms: int, code: str | None = None) -> None:
        """Log tool call error.

        Args:
            error: Error message
            duration_ms: Call duration in milliseconds
            code: Optional error code
        """
        context = self._context("tool_error", duration_ms=duration_ms, error=error)
        if code:
            context["error_code"] = code

        duration_s = duration_ms / 1000
        message = f"Tool '{self.tool_name}' failed ({duration_s:.2f}s): {error}"
        self.root._log(LogLevel.ERROR, "tool", message, context)
