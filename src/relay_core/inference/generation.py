"""LLM-backed argument generation."""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ConfigDict, ValidationError

from relay_core.config.models import GenerationConfig
from relay_core.logging.logger import RelayLogger
from relay_core.types import LogLevel

SYSTEM_PROMPT = (
    "You are an API argument builder. Given a user query and a tool description, "
    "produce the arguments for one call of that tool. Extract issue keys, comment "
    "text, status names, ids and search terms from the query. Respond with a single "
    "JSON object and nothing else."
)


@runtime_checkable
class GenerationPort(Protocol):
    """Translates a query into structured call arguments.

    Returns None (or an empty dict) when it has nothing to offer.
    """

    async def generate_arguments(
        self,
        tool_name: str,
        query: str,
        description: str,
        reference: str = "",
    ) -> dict[str, Any] | None: ...


class GeneratedArguments(BaseModel):
    """Generated call arguments.

    The REST-call keys are typed; any other key a tool takes passes through.
    """

    model_config = ConfigDict(extra="allow")

    endpoint: str | None = None
    method: str | None = None
    data: dict[str, Any] | None = None
    params: dict[str, Any] | None = None


def extract_json_object(text: str) -> str | None:
    """Slice from the first ``{`` to the last ``}``.

    Args:
        text: Model reply, possibly wrapped in prose or code fences

    Returns:
        Candidate JSON text, or None when there is no object
    """
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        return None
    return text[start : end + 1]


def parse_generated_arguments(text: str | None) -> dict[str, Any] | None:
    """Parse and validate a model reply into an argument map.

    Returns:
        Arguments without null values, or None if the reply is unusable
    """
    if not text:
        return None
    candidate = extract_json_object(text)
    if candidate is None:
        return None
    try:
        parsed = GeneratedArguments.model_validate(json.loads(candidate))
    except (json.JSONDecodeError, ValidationError):
        return None
    arguments = parsed.model_dump(exclude_none=True)
    if isinstance(arguments.get("method"), str):
        arguments["method"] = arguments["method"].upper()
    return arguments or None


def build_prompt(tool_name: str, query: str, description: str, reference: str) -> str:
    lines = [
        f"Tool: {tool_name}",
        f"Tool Description: {description}",
        f"User Query: {query}",
    ]
    if reference:
        lines.extend(["", reference])
    lines.extend(
        [
            "",
            "For REST-style tools respond like:",
            '{"endpoint": "...", "method": "GET|POST|PUT|DELETE", "data": {...}, "params": {...}}',
            "Omit data and params when they are not needed.",
        ]
    )
    return "\n".join(lines)


class OpenAIArgumentGenerator:
    """GenerationPort backed by an OpenAI-compatible chat completions API."""

    def __init__(
        self,
        config: GenerationConfig,
        client: AsyncOpenAI | None = None,
        logger: RelayLogger | None = None,
    ):
        """Initialize the generator.

        Args:
            config: Generation settings
            client: Optional pre-built client
            logger: Optional logger
        """
        self._config = config
        self._logger = logger
        self._client = client or AsyncOpenAI(
            api_key=config.api_key or None,
            base_url=config.base_url or None,
            timeout=config.timeout,
        )

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "inference", message, kwargs or None)

    async def generate_arguments(
        self,
        tool_name: str,
        query: str,
        description: str,
        reference: str = "",
    ) -> dict[str, Any] | None:
        """Ask the model for call arguments.

        Args:
            tool_name: Tool being called
            query: Free-text query
            description: Tool description
            reference: Valid call shapes for the tool's category

        Returns:
            Argument map, or None on any failure
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._config.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": build_prompt(tool_name, query, description, reference),
                    },
                ],
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
            )
        except OpenAIError as e:
            self._log(LogLevel.WARN, f"Argument generation failed for '{tool_name}': {e}")
            return None

        if not response.choices:
            return None
        content = response.choices[0].message.content
        arguments = parse_generated_arguments(content)
        if arguments is None:
            self._log(LogLevel.WARN, f"Unusable generated arguments for '{tool_name}'")
        return arguments

    async def aclose(self) -> None:
        await self._client.close()
