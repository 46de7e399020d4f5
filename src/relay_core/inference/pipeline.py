"""Three-tier argument inference: explicit, generated, heuristic."""

from __future__ import annotations

from typing import Any

from relay_core.catalog.types import Tool
from relay_core.logging.logger import RelayLogger
from relay_core.types import LogLevel

from .generation import GenerationPort
from .heuristics import HeuristicArgumentBuilder
from .hints import call_shape_reference
from .types import ArgumentTier, InferredArguments


class ArgumentInferencePipeline:
    """Decides the arguments for one tool call.

    Tiers run in priority order and the first non-empty result wins. A tier
    that has nothing to offer falls through; that is not an error.
    """

    def __init__(
        self,
        generator: GenerationPort | None = None,
        heuristics: HeuristicArgumentBuilder | None = None,
        logger: RelayLogger | None = None,
    ):
        """Initialize the pipeline.

        Args:
            generator: Optional generation port (tier 2 is skipped without one)
            heuristics: Heuristic builder (defaults to HeuristicArgumentBuilder())
            logger: Optional logger
        """
        self._generator = generator
        self._heuristics = heuristics or HeuristicArgumentBuilder()
        self._logger = logger

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "inference", message, kwargs or None)

    @property
    def generation_enabled(self) -> bool:
        return self._generator is not None

    async def build_arguments(
        self,
        tool: Tool,
        user_query: str | None,
        explicit_inputs: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build call arguments.

        Args:
            tool: Tool being called
            user_query: Free-text task description
            explicit_inputs: Caller-supplied arguments

        Returns:
            Argument map (possibly empty)
        """
        return (await self.infer(tool, user_query, explicit_inputs)).arguments

    async def infer(
        self,
        tool: Tool,
        user_query: str | None,
        explicit_inputs: dict[str, Any] | None = None,
    ) -> InferredArguments:
        """Build call arguments and report which tier produced them."""
        if explicit_inputs:
            return InferredArguments(dict(explicit_inputs), ArgumentTier.EXPLICIT)

        query = user_query or ""

        if self._generator is not None and query.strip():
            generated = await self._generate(tool, query)
            if generated:
                return InferredArguments(generated, ArgumentTier.GENERATED)

        return InferredArguments(
            self._heuristics.build(tool, query),
            ArgumentTier.HEURISTIC,
        )

    async def _generate(self, tool: Tool, query: str) -> dict[str, Any] | None:
        assert self._generator is not None
        try:
            generated = await self._generator.generate_arguments(
                tool.name,
                query,
                tool.description,
                call_shape_reference(tool),
            )
        except Exception as e:
            self._log(LogLevel.WARN, f"Argument generation raised for '{tool.name}': {e}")
            return None

        if not isinstance(generated, dict) or not generated:
            self._log(LogLevel.DEBUG, f"No generated arguments for '{tool.name}'")
            return None
        return generated
