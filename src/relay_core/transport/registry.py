"""Category to transport mapping."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from relay_core.config.models import TransportDefinition
from relay_core.logging.logger import RelayLogger
from relay_core.types import LogLevel, TransportProtocol

from .base import TransportClient
from .jsonrpc import JsonRpcTransport
from .rest import RestTransport

TRANSPORT_CLASSES: dict[TransportProtocol, type[TransportClient]] = {
    TransportProtocol.JSONRPC: JsonRpcTransport,
    TransportProtocol.REST: RestTransport,
}


def create_transport(
    category: str,
    definition: TransportDefinition,
    client: httpx.AsyncClient | None = None,
    logger: RelayLogger | None = None,
) -> TransportClient:
    """Build the transport client for a definition's protocol.

    Args:
        category: Tool category
        definition: Connection settings
        client: Optional shared httpx client
        logger: Optional logger

    Returns:
        TransportClient instance

    Raises:
        ValueError: If the protocol has no registered implementation
    """
    protocol = TransportProtocol(definition.protocol)
    transport_cls = TRANSPORT_CLASSES.get(protocol)
    if transport_cls is None:
        msg = f"No transport registered for protocol: {protocol.value}"
        raise ValueError(msg)
    return transport_cls(category, definition, client=client, logger=logger)


class TransportRegistry:
    """Static map of category to transport client.

    Built once at startup; lookups are read-only afterwards.
    """

    def __init__(self, logger: RelayLogger | None = None):
        self._transports: dict[str, TransportClient] = {}
        self._logger = logger

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "transport", message, kwargs or None)

    @classmethod
    def from_config(
        cls,
        transports: dict[str, TransportDefinition],
        logger: RelayLogger | None = None,
    ) -> TransportRegistry:
        """Create one transport per configured category.

        Categories with an empty URL are skipped.

        Args:
            transports: Category to definition mapping
            logger: Optional logger

        Returns:
            Populated TransportRegistry
        """
        registry = cls(logger=logger)
        for category, definition in transports.items():
            if not definition.configured:
                registry._log(LogLevel.WARN, f"Transport for '{category}' not configured")
                continue
            registry.register(category, create_transport(category, definition, logger=logger))
        return registry

    def register(self, category: str, transport: TransportClient) -> None:
        self._transports[category.lower()] = transport
        self._log(
            LogLevel.INFO,
            f"Transport for '{category}' registered ({transport.protocol.value})",
            url=transport.definition.url,
        )

    def get(self, category: str) -> TransportClient | None:
        """Transport for a category (case-insensitive), None when unconfigured."""
        return self._transports.get(category.lower())

    def categories(self) -> list[str]:
        return list(self._transports.keys())

    def items(self) -> list[tuple[str, TransportClient]]:
        return list(self._transports.items())

    async def aclose(self) -> None:
        """Close every transport client."""
        await asyncio.gather(
            *(transport.aclose() for transport in self._transports.values()),
            return_exceptions=True,
        )
