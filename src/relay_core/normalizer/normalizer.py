"""Response normalizer - one result-or-error shape for every transport."""

from __future__ import annotations

import json
from typing import Any

from relay_core.errors import create_error
from relay_core.transport.protocol import (
    JSONRPCMessage,
    extract_event_stream_payload,
    extract_json_payload,
)
from relay_core.types import ResponseKind, TransportProtocol

from .types import NormalizedResponse

EMPTY_RESPONSE_OUTPUT = {
    "error": "empty_response",
    "message": "Remote server returned an empty response",
}


class ResponseNormalizer:
    """Parses raw tool server bodies into NormalizedResponse values."""

    def normalize(
        self,
        raw: str | None,
        protocol: TransportProtocol = TransportProtocol.JSONRPC,
    ) -> NormalizedResponse:
        """Normalize a raw response body.

        Args:
            raw: Body as returned by the transport
            protocol: Protocol the body was received over

        Returns:
            NormalizedResponse

        Raises:
            RelayError: MALFORMED_RESPONSE if the payload is not valid JSON
        """
        if raw is None or not raw.strip():
            return NormalizedResponse(
                kind=ResponseKind.EMPTY,
                output=dict(EMPTY_RESPONSE_OUTPUT),
                error_code="EMPTY_RESPONSE",
                error_message=EMPTY_RESPONSE_OUTPUT["message"],
            )

        if protocol == TransportProtocol.REST:
            payload_text = extract_json_payload(raw)
        else:
            payload_text = extract_event_stream_payload(raw)

        try:
            payload = JSONRPCMessage.parse(payload_text)
        except json.JSONDecodeError as e:
            raise create_error("MALFORMED_RESPONSE", detail=str(e)) from e

        if JSONRPCMessage.is_error(payload):
            return self._remote_error(JSONRPCMessage.get_error(payload))

        if JSONRPCMessage.has_result(payload):
            return NormalizedResponse(kind=ResponseKind.RESULT, output=payload["result"])

        return NormalizedResponse(kind=ResponseKind.RESULT, output=payload)

    def _remote_error(self, error: Any) -> NormalizedResponse:
        if isinstance(error, dict):
            message = error.get("message") or "Unknown error"
            code = error.get("code")
        else:
            message = str(error) if error else "Unknown error"
            code = None
        if code is None:
            code = -1

        return NormalizedResponse(
            kind=ResponseKind.REMOTE_ERROR,
            output={"error": message, "code": code},
            error_code="REMOTE_PROTOCOL_ERROR",
            error_message=str(message),
        )


def extract_text(output: Any) -> str:
    """Render a tool output for the aggregated report text.

    MCP call results (``{"content": [{"type": "text", "text": ...}]}``) are
    flattened to their text items; anything else is pretty-printed JSON.

    Args:
        output: Normalized output

    Returns:
        Human-readable text
    """
    if isinstance(output, dict) and isinstance(output.get("content"), list):
        texts = [
            item["text"]
            for item in output["content"]
            if isinstance(item, dict) and item.get("type") == "text" and "text" in item
        ]
        if texts:
            return "\n".join(str(text) for text in texts)

    if isinstance(output, str):
        return output
    return json.dumps(output, indent=2, ensure_ascii=False, default=str)
