"""JSON-RPC and event-stream helpers for tool server communication."""

import json
from typing import Any

EVENT_STREAM_DATA_PREFIX = "data: "
EMPTY_PAYLOAD = "{}"


class JSONRPCMessage:
    """JSON-RPC 2.0 message builder and parser."""

    @staticmethod
    def request(method: str, params: dict[str, Any] | None = None, id: int = 1) -> dict[str, Any]:
        """Build a JSON-RPC request.

        Args:
            method: Method name (e.g., "tools/list", "tools/call")
            params: Optional parameters
            id: Request ID

        Returns:
            JSON-RPC request dict
        """
        msg: dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": id,
            "method": method,
        }
        if params is not None:
            msg["params"] = params
        return msg

    @staticmethod
    def tool_call(name: str, arguments: dict[str, Any], id: int) -> dict[str, Any]:
        """Build a tools/call request.

        Args:
            name: Remote tool name
            arguments: Tool arguments
            id: Request ID

        Returns:
            JSON-RPC request dict
        """
        return JSONRPCMessage.request(
            "tools/call",
            {"name": name, "arguments": arguments},
            id=id,
        )

    @staticmethod
    def parse(message: str | bytes) -> Any:
        """Parse a JSON-RPC message.

        Raises:
            json.JSONDecodeError: If message is not valid JSON
        """
        if isinstance(message, bytes):
            message = message.decode("utf-8")
        return json.loads(message)

    @staticmethod
    def is_error(message: Any) -> bool:
        return isinstance(message, dict) and "error" in message

    @staticmethod
    def has_result(message: Any) -> bool:
        return isinstance(message, dict) and "result" in message

    @staticmethod
    def get_result(message: dict[str, Any]) -> Any:
        """Extract result from response message.

        Raises:
            KeyError: If message has no result
        """
        return message["result"]

    @staticmethod
    def get_error(message: dict[str, Any]) -> Any:
        """Extract error from error response.

        Raises:
            KeyError: If message has no error
        """
        return message["error"]


def extract_event_stream_payload(raw: str) -> str:
    """Pull the JSON payload out of an event-stream frame.

    The first line starting with ``data: `` wins. Without one, text that
    already looks like a JSON object is used as-is; anything else yields
    an empty object.

    Args:
        raw: Response body as received

    Returns:
        JSON text to parse
    """
    for line in raw.splitlines():
        if line.startswith(EVENT_STREAM_DATA_PREFIX):
            return line[len(EVENT_STREAM_DATA_PREFIX) :].strip()

    trimmed = raw.strip()
    if trimmed.startswith("{"):
        return trimmed
    return EMPTY_PAYLOAD


def extract_json_payload(raw: str) -> str:
    """Payload of a plain JSON body (REST servers may return arrays)."""
    trimmed = raw.strip()
    if trimmed.startswith(("{", "[")):
        return trimmed
    return EMPTY_PAYLOAD
