"""Unit tests for tool discovery."""

import threading
from unittest.mock import AsyncMock, MagicMock

import pytest

from relay_core.catalog import ToolCatalog, ToolDiscovery, derive_capabilities, tool_from_descriptor
from relay_core.errors import create_error
from relay_core.transport import TransportRegistry
from relay_core.types import TransportProtocol


def _mock_transport(protocol: TransportProtocol, tools=None, error=None) -> MagicMock:
    transport = MagicMock()
    transport.protocol = protocol
    transport.list_tools = AsyncMock(return_value=tools or [], side_effect=error)
    return transport


class TestToolFromDescriptor:
    """Tests for descriptor conversion."""

    def test_jsonrpc_descriptor(self):
        """JSON-RPC tools are prefixed with the category."""
        tool = tool_from_descriptor(
            {
                "name": "add_labels",
                "description": "Add labels to an issue",
                "inputSchema": {"type": "object", "required": ["issue_key", "labels"]},
            },
            "jira",
            TransportProtocol.JSONRPC,
        )

        assert tool.name == "mcp_jira_add_labels"
        assert tool.remote_tool_name() == "add_labels"
        assert tool.required_inputs == ("issue_key", "labels")
        assert {"jira", "add", "labels"} <= tool.capabilities

    def test_rest_descriptor_keeps_name(self):
        tool = tool_from_descriptor({"name": "who_am_i"}, "webex", TransportProtocol.REST)
        assert tool.name == "who_am_i"
        assert tool.required_inputs == ()

    def test_derive_capabilities(self):
        capabilities = derive_capabilities("search_spaces_by_name", "Find spaces", "Webex")
        assert {"webex", "search", "find", "spaces", "name"} <= capabilities
        assert "by" not in capabilities


class TestToolDiscovery:
    """Tests for ToolDiscovery.discover."""

    @pytest.mark.asyncio
    async def test_registers_and_isolates_failures(self):
        """A failing category is reported; others still register."""
        registry = TransportRegistry()
        registry.register("jira", _mock_transport(TransportProtocol.JSONRPC, [{"name": "add_labels"}]))
        registry.register(
            "github",
            _mock_transport(
                TransportProtocol.JSONRPC,
                error=create_error("HTTP_TRANSPORT_ERROR", detail="HTTP 502"),
            ),
        )
        registry.register("webex", _mock_transport(TransportProtocol.REST, [{"name": "who_am_i"}]))
        catalog = ToolCatalog()

        result = await ToolDiscovery(catalog, registry).discover()

        assert result.registered == {"jira": ["mcp_jira_add_labels"], "webex": ["who_am_i"]}
        assert set(result.errors) == {"github"}
        assert result.total == 2
        assert catalog.exists("mcp_jira_add_labels")
        assert catalog.lookup("who_am_i").category == "webex"

    @pytest.mark.asyncio
    async def test_store_writes_run_off_the_event_loop(self):
        """Persisting discovered tools happens in a worker thread."""
        loop_thread = threading.get_ident()
        write_threads = []
        store = MagicMock()
        store.save_all.side_effect = lambda tools: write_threads.append(threading.get_ident())
        registry = TransportRegistry()
        registry.register("jira", _mock_transport(TransportProtocol.JSONRPC, [{"name": "add_labels"}]))
        catalog = ToolCatalog(store=store)

        await ToolDiscovery(catalog, registry).discover()

        assert len(write_threads) == 1
        assert write_threads[0] != loop_thread
        saved = store.save_all.call_args.args[0]
        assert [tool.name for tool in saved] == ["mcp_jira_add_labels"]
