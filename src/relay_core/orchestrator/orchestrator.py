"""Execution orchestrator - runs a task's tools and assembles the report."""

from __future__ import annotations

import asyncio
import time
import uuid
from typing import Any

from relay_core.catalog import Tool, ToolCatalog
from relay_core.errors import ErrorFactory, RelayError, create_error
from relay_core.inference import ArgumentInferencePipeline
from relay_core.logging.logger import RelayLogger, RunLogger, ToolCallLogger
from relay_core.normalizer import ResponseNormalizer, extract_text
from relay_core.telemetry import (
    get_metrics,
    instrument_run,
    instrument_tool_call,
    record_run_result,
    record_tool_result,
)
from relay_core.transport import TransportRegistry
from relay_core.types import InvocationStatus, ResponseKind, RunStatus

from .types import ExecutionReport, TaskRequest, ToolInvocationResult


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def format_section(result: ToolInvocationResult) -> str:
    """Aggregated-text section for one tool result."""
    if result.success:
        return f"=== Results from {result.tool_name} ===\n{extract_text(result.output)}\n\n"
    message = result.error_message or extract_text(result.output)
    return f"=== Error from {result.tool_name} ===\n{message}\n\n"


class ExecutionOrchestrator:
    """Runs the allowed tools of a task and reports on every one.

    Per run: resolve each allowed name in the catalog (absent names are
    skipped), infer arguments, invoke through the category's transport,
    normalize the response and record a result. Per-tool failures become
    error results; only a failure of the run itself marks it failed.
    """

    def __init__(
        self,
        catalog: ToolCatalog,
        transports: TransportRegistry,
        inference: ArgumentInferencePipeline | None = None,
        normalizer: ResponseNormalizer | None = None,
        error_factory: ErrorFactory | None = None,
        logger: RelayLogger | None = None,
        max_concurrency: int = 1,
    ):
        """Initialize orchestrator.

        Args:
            catalog: Tool catalog
            transports: Category to transport mapping
            inference: Argument inference pipeline
            normalizer: Response normalizer
            error_factory: Error factory for foreign exceptions
            logger: Optional logger
            max_concurrency: Tools in flight per run (1 = sequential)
        """
        if max_concurrency < 1:
            msg = "max_concurrency must be >= 1"
            raise ValueError(msg)
        self._catalog = catalog
        self._transports = transports
        self._inference = inference or ArgumentInferencePipeline(logger=logger)
        self._normalizer = normalizer or ResponseNormalizer()
        self._error_factory = error_factory or ErrorFactory()
        self._logger = logger
        self._max_concurrency = max_concurrency

    async def execute_task(
        self,
        allowed_tools: list[str],
        query: str,
        explicit_inputs: dict[str, Any] | None = None,
        agent_name: str = "agent",
    ) -> ExecutionReport:
        """Run a task.

        Args:
            allowed_tools: Tool names to run, in order
            query: Natural-language task description
            explicit_inputs: Caller-supplied arguments used for every tool
            agent_name: Agent the run belongs to

        Returns:
            ExecutionReport (never raises for tool or run failures)
        """
        return await self.execute(
            TaskRequest(
                allowed_tools=allowed_tools,
                query=query,
                inputs=explicit_inputs or {},
                agent_name=agent_name,
            )
        )

    async def execute(self, request: TaskRequest) -> ExecutionReport:
        """Run a task request and build its report."""
        run_id = f"run_{uuid.uuid4().hex[:12]}"
        run_log = self._logger.run(run_id, request.agent_name) if self._logger else None
        start = time.monotonic()
        results: list[ToolInvocationResult] = []
        run_error: RelayError | None = None

        async with instrument_run(request.agent_name, run_id) as telemetry:
            try:
                if run_log:
                    run_log.started(len(request.allowed_tools))
                tools = self._resolve_tools(request.allowed_tools, run_log)
                await self._invoke_all(tools, request, run_id, run_log, results)
            except Exception as e:
                run_error = create_error("RUN_FAILED", detail=str(e), run_id=run_id)
            aggregated_text = "".join(format_section(result) for result in results)
            record_run_result(
                telemetry,
                failed=run_error is not None,
                error=run_error.message if run_error else None,
            )

        duration_ms = _elapsed_ms(start)
        if run_log:
            if run_error is not None:
                run_log.failed(run_error, duration_ms)
            else:
                errors = sum(1 for result in results if not result.success)
                run_log.completed(duration_ms, len(results), errors)

        return ExecutionReport(
            agent_name=request.agent_name,
            status=RunStatus.FAILED if run_error else RunStatus.COMPLETED,
            aggregated_text=aggregated_text,
            tool_results=results,
            total_duration_ms=duration_ms,
            run_id=run_id,
            error=run_error.message if run_error else None,
        )

    def _resolve_tools(self, names: list[str], run_log: RunLogger | None) -> list[Tool]:
        tools = []
        for name in names:
            tool = self._catalog.lookup(name)
            if tool is None:
                if run_log:
                    run_log.tool_skipped(name)
                continue
            tools.append(tool)
        return tools

    async def _invoke_all(
        self,
        tools: list[Tool],
        request: TaskRequest,
        run_id: str,
        run_log: RunLogger | None,
        results: list[ToolInvocationResult],
    ) -> None:
        if self._max_concurrency == 1 or len(tools) <= 1:
            for tool in tools:
                results.append(await self._invoke_one(tool, request, run_id, run_log))
            return

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(tool: Tool) -> ToolInvocationResult:
            async with semaphore:
                return await self._invoke_one(tool, request, run_id, run_log)

        # gather returns in argument order regardless of completion order
        results.extend(await asyncio.gather(*(bounded(tool) for tool in tools)))

    async def _invoke_one(
        self,
        tool: Tool,
        request: TaskRequest,
        run_id: str,
        run_log: RunLogger | None,
    ) -> ToolInvocationResult:
        tool_log = run_log.tool(tool.name, tool.category) if run_log else None
        start = time.monotonic()
        arguments: dict[str, Any] = {}

        async with instrument_tool_call(tool.name, tool.category) as telemetry:
            try:
                arguments = await self._infer(tool, request, tool_log)
                if tool_log:
                    tool_log.calling()
                status, output, error = await self._call(tool, arguments)
            except Exception as e:
                relay_error = self._error_factory.from_exception(
                    e, tool_name=tool.name, tool_category=tool.category, run_id=run_id
                )
                status, output, error = InvocationStatus.ERROR, relay_error.to_output(), relay_error

            record_tool_result(
                telemetry,
                success=status == InvocationStatus.SUCCESS,
                error_code=error.code if error else None,
            )

        duration_ms = _elapsed_ms(start)
        if tool_log:
            if error is None:
                tool_log.result(output, duration_ms)
            else:
                tool_log.error(error.message, duration_ms, code=error.code)

        return ToolInvocationResult(
            tool_name=tool.name,
            status=status,
            output=output,
            duration_ms=duration_ms,
            arguments=arguments,
            error_code=error.code if error else None,
            error_message=error.message if error else None,
        )

    async def _infer(
        self,
        tool: Tool,
        request: TaskRequest,
        tool_log: ToolCallLogger | None,
    ) -> dict[str, Any]:
        try:
            inferred = await self._inference.infer(tool, request.query, request.inputs)
        except Exception as e:
            raise create_error(
                "ARGUMENT_INFERENCE_FAILED",
                detail=str(e),
                tool_name=tool.name,
                tool_category=tool.category,
            ) from e

        if tool_log:
            tool_log.arguments(inferred.tier.value, inferred.arguments)
        metrics = get_metrics()
        if metrics:
            metrics.record_argument_tier(tool.name, inferred.tier.value)
        return inferred.arguments

    async def _call(
        self,
        tool: Tool,
        arguments: dict[str, Any],
    ) -> tuple[InvocationStatus, Any, RelayError | None]:
        transport = self._transports.get(tool.category)
        if transport is None:
            error = create_error(
                "TRANSPORT_NOT_CONFIGURED",
                tool_name=tool.name,
                tool_category=tool.category,
            )
            return InvocationStatus.ERROR, error.to_output(), error

        raw = await transport.invoke(tool.remote_tool_name(), arguments)
        normalized = self._normalizer.normalize(raw, transport.protocol)

        if normalized.success:
            return InvocationStatus.SUCCESS, normalized.output, None

        error = create_error(
            normalized.error_code or "INTERNAL_ERROR",
            detail=normalized.error_message,
            tool_name=tool.name,
            tool_category=tool.category,
        )
        error.message = normalized.error_message or error.message
        if normalized.kind == ResponseKind.REMOTE_ERROR:
            error.remote_code = normalized.output.get("code")
        return InvocationStatus.ERROR, normalized.output, error
