"""Unit tests for TransportRegistry and protocol helpers."""

import pytest

from relay_core.config.models import TransportDefinition
from relay_core.transport import (
    JsonRpcTransport,
    RestTransport,
    TransportRegistry,
    create_transport,
    extract_event_stream_payload,
    extract_json_payload,
)
from relay_core.types import TransportProtocol


class TestTransportRegistry:
    """Tests for building transports from config."""

    @pytest.mark.asyncio
    async def test_from_config(self):
        """Configured categories get a client of the right protocol."""
        registry = TransportRegistry.from_config(
            {
                "jira": TransportDefinition(url="http://jira.local/mcp"),
                "Webex": TransportDefinition(url="http://webex.local", protocol=TransportProtocol.REST),
                "github": TransportDefinition(url=""),
            }
        )

        assert isinstance(registry.get("jira"), JsonRpcTransport)
        assert isinstance(registry.get("webex"), RestTransport)
        assert isinstance(registry.get("WEBEX"), RestTransport)
        assert registry.get("github") is None
        assert registry.get("confluence") is None
        assert sorted(registry.categories()) == ["jira", "webex"]

        await registry.aclose()

    def test_create_transport_accepts_string_protocol(self):
        definition = TransportDefinition(url="http://x", protocol="rest")  # type: ignore[arg-type]
        assert isinstance(create_transport("webex", definition), RestTransport)


class TestPayloadExtraction:
    """Tests for event-stream and JSON payload extraction."""

    def test_event_stream_data_line(self):
        raw = 'event: message\ndata: {"result":{"x":1}}\n\n'
        assert extract_event_stream_payload(raw) == '{"result":{"x":1}}'

    def test_first_data_line_wins(self):
        raw = 'data: {"a":1}\ndata: {"b":2}\n'
        assert extract_event_stream_payload(raw) == '{"a":1}'

    def test_plain_json(self):
        assert extract_event_stream_payload('  {"result":{}}  ') == '{"result":{}}'

    def test_unrecognized_body(self):
        assert extract_event_stream_payload("<html>redirect</html>") == "{}"

    def test_json_array(self):
        assert extract_json_payload(" [1] ") == "[1]"
        assert extract_json_payload("oops") == "{}"
