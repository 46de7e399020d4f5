"""Tool discovery from configured transports."""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from typing import Any

from relay_core.logging.logger import RelayLogger
from relay_core.transport import TransportClient, TransportRegistry
from relay_core.types import LogLevel, TransportProtocol

from .catalog import ToolCatalog
from .types import Tool

ACTION_KEYWORDS = (
    "search",
    "get",
    "list",
    "create",
    "update",
    "delete",
    "add",
    "remove",
    "post",
    "send",
    "read",
    "write",
    "query",
    "fetch",
    "find",
)


@dataclass
class DiscoveryResult:
    """Tools registered per category, and categories that failed."""

    registered: dict[str, list[str]] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(len(names) for names in self.registered.values())


def derive_capabilities(name: str, description: str, category: str) -> set[str]:
    """Capability keywords for a discovered tool.

    Args:
        name: Remote tool name
        description: Tool description
        category: Tool category

    Returns:
        Category, matching action keywords and name parts longer than two characters
    """
    text = f"{name} {description}".lower()
    capabilities = {category.lower()}
    capabilities.update(keyword for keyword in ACTION_KEYWORDS if keyword in text)
    capabilities.update(part for part in re.split(r"[_\-\s]+", name.lower()) if len(part) > 2)
    return capabilities


def tool_from_descriptor(
    descriptor: dict[str, Any],
    category: str,
    protocol: TransportProtocol,
) -> Tool:
    """Convert a server tool descriptor into a catalog Tool.

    Args:
        descriptor: Entry from tools/list or GET /mcp/tools
        category: Category of the transport that listed it
        protocol: Protocol of that transport

    Returns:
        Tool named ``mcp_<category>_<name>`` (plain ``<name>`` for REST servers)
    """
    remote_name = str(descriptor["name"])
    description = str(descriptor.get("description") or "")
    schema = descriptor.get("inputSchema") or descriptor.get("input_schema") or {}
    required = schema.get("required") if isinstance(schema, dict) else None

    if protocol == TransportProtocol.REST:
        name = remote_name
    else:
        name = f"mcp_{category}_{remote_name}"

    return Tool.create(
        name=name,
        category=category,
        description=description,
        capabilities=derive_capabilities(remote_name, description, category),
        required_inputs=[str(item) for item in required or []],
        remote_name=remote_name,
    )


class ToolDiscovery:
    """Registers tools that configured servers report."""

    def __init__(
        self,
        catalog: ToolCatalog,
        transports: TransportRegistry,
        logger: RelayLogger | None = None,
    ):
        self._catalog = catalog
        self._transports = transports
        self._logger = logger

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "catalog", message, kwargs or None)

    async def discover(self) -> DiscoveryResult:
        """Ask every transport for its tools and register them.

        A failing category is recorded in the result and does not stop
        the others.

        Returns:
            DiscoveryResult summary
        """
        result = DiscoveryResult()
        for category, transport in self._transports.items():
            try:
                tools = await self._discover_category(category, transport)
            except Exception as e:
                self._log(LogLevel.WARN, f"Discovery failed for '{category}': {e}")
                result.errors[category] = str(e)
                continue

            # Registering may write the store file.
            await asyncio.to_thread(self._catalog.register_many, tools)
            result.registered[category] = [tool.name for tool in tools]
            self._log(LogLevel.INFO, f"Discovered {len(tools)} tools for '{category}'")
        return result

    async def _discover_category(self, category: str, transport: TransportClient) -> list[Tool]:
        descriptors = await transport.list_tools()
        return [
            tool_from_descriptor(descriptor, category, transport.protocol)
            for descriptor in descriptors
        ]
