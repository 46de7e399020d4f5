"""Transport client interface shared by every wire protocol."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from relay_core.config.models import TransportDefinition
from relay_core.errors import RelayError, create_error, get_error_factory
from relay_core.logging.logger import RelayLogger
from relay_core.types import LogLevel, TransportProtocol


class TransportClient(ABC):
    """Sends tool calls to one category's server and returns the raw body.

    Subclasses build the request shape; status handling, error conversion
    and client lifecycle live here.
    """

    protocol: TransportProtocol

    def __init__(
        self,
        category: str,
        definition: TransportDefinition,
        client: httpx.AsyncClient | None = None,
        logger: RelayLogger | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize transport client.

        Args:
            category: Tool category served by this transport
            definition: Connection settings
            client: Optional pre-built httpx client (tests pass a MockTransport)
            logger: Optional logger
            http_transport: Optional httpx transport mounted into the client
                built from ``definition``; ignored when ``client`` is given
        """
        self.category = category
        self.definition = definition
        self._logger = logger
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(definition.read_timeout, connect=definition.connect_timeout),
            follow_redirects=definition.follow_redirects,
            transport=http_transport,
        )

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "transport", message, kwargs or None)

    @property
    def base_url(self) -> str:
        return self.definition.url.rstrip("/")

    @abstractmethod
    async def invoke(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """Call a remote tool.

        Args:
            tool_name: Name the remote server knows the tool by
            arguments: Call arguments

        Returns:
            Raw response body

        Raises:
            RelayError: HTTP_TRANSPORT_ERROR or TOOL_TIMEOUT
        """

    @abstractmethod
    async def list_tools(self) -> list[dict[str, Any]]:
        """List tool descriptors offered by the server.

        Returns:
            Descriptors with at least a ``name`` key

        Raises:
            RelayError: On transport or parse failure
        """

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _send(
        self,
        method: str,
        url: str,
        tool_name: str | None,
        headers: dict[str, str],
        json_body: Any = None,
    ) -> str:
        try:
            response = await self._client.request(method, url, headers=headers, json=json_body)
        except httpx.HTTPError as e:
            raise get_error_factory().from_exception(
                e, tool_name=tool_name, tool_category=self.category
            ) from e

        if not response.is_success:
            self._log(
                LogLevel.WARN,
                f"{self.category} server returned HTTP {response.status_code}",
                url=url,
            )
            raise create_error(
                "HTTP_TRANSPORT_ERROR",
                detail=f"HTTP {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
                tool_name=tool_name,
                tool_category=self.category,
            )

        return response.text

    def _token_headers(self, default_header: str | None) -> dict[str, str]:
        token = self.definition.token
        if not token:
            return {}
        header = self.definition.token_header or default_header
        return {header: token} if header else {}


def malformed_listing(detail: str, category: str) -> RelayError:
    """Build the error raised when a discovery listing cannot be read."""
    return create_error("MALFORMED_RESPONSE", detail=detail, tool_category=category)
