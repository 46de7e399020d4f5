"""REST transport: one endpoint per tool."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from relay_core.types import LogLevel, TransportProtocol

from .base import TransportClient, malformed_listing
from .protocol import extract_json_payload

DEFAULT_TOKEN_HEADER = "X-Webex-Token"


class RestTransport(TransportClient):
    """POSTs the argument map to ``<base>/mcp/tools/<name>``."""

    protocol = TransportProtocol.REST

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(self._token_headers(DEFAULT_TOKEN_HEADER))
        return headers

    def tool_url(self, tool_name: str) -> str:
        return f"{self.base_url}/mcp/tools/{quote(tool_name, safe='')}"

    async def invoke(self, tool_name: str, arguments: dict[str, Any]) -> str:
        url = self.tool_url(tool_name)
        self._log(LogLevel.DEBUG, f"POST {url}")
        return await self._send("POST", url, tool_name, self._headers(), arguments)

    async def list_tools(self) -> list[dict[str, Any]]:
        raw = await self._send("GET", f"{self.base_url}/mcp/tools", None, self._headers())

        try:
            payload = json.loads(extract_json_payload(raw))
        except json.JSONDecodeError as e:
            raise malformed_listing(str(e), self.category) from e

        if isinstance(payload, dict):
            payload = payload.get("tools", [])
        if not isinstance(payload, list):
            return []
        return [tool for tool in payload if isinstance(tool, dict) and tool.get("name")]
