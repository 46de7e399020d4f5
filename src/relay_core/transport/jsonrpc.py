"""JSON-RPC over HTTP transport with event-stream responses."""

from __future__ import annotations

import itertools
import json
import threading
from typing import Any

from relay_core.types import LogLevel, TransportProtocol

from .base import TransportClient, malformed_listing
from .protocol import JSONRPCMessage, extract_event_stream_payload

ACCEPT_HEADER = "application/json, text/event-stream"


class JsonRpcTransport(TransportClient):
    """POSTs ``tools/call`` requests to a single JSON-RPC endpoint."""

    protocol = TransportProtocol.JSONRPC

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()

    def next_id(self) -> int:
        """Next request id; strictly increasing per client."""
        with self._id_lock:
            return next(self._ids)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": ACCEPT_HEADER,
        }
        if self.definition.token:
            headers["Authorization"] = f"Bearer {self.definition.token}"
            if self.definition.token_header:
                headers[self.definition.token_header] = self.definition.token
        return headers

    async def invoke(self, tool_name: str, arguments: dict[str, Any]) -> str:
        body = JSONRPCMessage.tool_call(tool_name, arguments, id=self.next_id())
        self._log(LogLevel.DEBUG, f"tools/call {tool_name} -> {self.base_url}", id=body["id"])
        return await self._send("POST", self.definition.url, tool_name, self._headers(), body)

    async def list_tools(self) -> list[dict[str, Any]]:
        body = JSONRPCMessage.request("tools/list", {}, id=self.next_id())
        raw = await self._send("POST", self.definition.url, None, self._headers(), body)

        try:
            message = JSONRPCMessage.parse(extract_event_stream_payload(raw))
        except json.JSONDecodeError as e:
            raise malformed_listing(str(e), self.category) from e

        if JSONRPCMessage.is_error(message):
            error = JSONRPCMessage.get_error(message) or {}
            raise malformed_listing(f"tools/list failed: {error}", self.category)

        result = message.get("result") if isinstance(message, dict) else None
        tools = result.get("tools") if isinstance(result, dict) else None
        if not isinstance(tools, list):
            return []
        return [tool for tool in tools if isinstance(tool, dict) and tool.get("name")]
