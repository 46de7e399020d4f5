"""Unit tests for RelayApplication wiring."""

import io
import json

import httpx
import pytest

from relay_core import RelayApplication
from relay_core.config import ConfigLoader
from relay_core.transport import JsonRpcTransport
from relay_core.types import RunStatus

CONFIG = """
transports:
  jira:
    url: http://jira-mcp.local:8080/mcp
  github:
    url: ""
catalog:
  store_path: {store}
  tools:
    - name: mcp_jira_custom_tool
      category: jira
      description: Custom tool from config
execution:
  max_concurrency: 2
logging:
  level: ERROR
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "relay-config.yaml"
    path.write_text(CONFIG.format(store=tmp_path / "tools.yaml"))
    return path


class TestRelayApplication:
    """Tests for initialize/execute/shutdown."""

    @pytest.mark.asyncio
    async def test_initialize(self, config_path, tmp_path):
        """Catalog holds built-in plus configured tools and is persisted."""
        app = RelayApplication(str(config_path), log_output=io.StringIO())
        await app.initialize()

        assert app.initialized
        assert app.catalog.exists("mcp_jira-sjc12_call_jira_rest_api")
        assert app.catalog.exists("mcp_jira_custom_tool")
        assert app.transports.categories() == ["jira"]
        assert app.generator is None
        assert not app.inference.generation_enabled
        assert (tmp_path / "tools.yaml").exists()

        await app.shutdown()
        assert not app.initialized

    @pytest.mark.asyncio
    async def test_execute_task(self, tmp_path):
        """End to end: config in, report out, transport mocked at the wire."""
        config = ConfigLoader().load_from_dict(
            {
                "transports": {"jira": {"url": "http://jira-mcp.local:8080/mcp"}},
                "logging": {"level": "ERROR"},
            }
        )
        app = RelayApplication(config=config, log_output=io.StringIO())
        await app.initialize()

        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, text='data: {"result": {"key": "PROJ-5"}}\n\n')

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        original = app.transports.get("jira")
        await original.aclose()
        definition = original.definition
        app.transports.register("jira", JsonRpcTransport("jira", definition, client=client))

        report = await app.execute_task(
            ["mcp_jira-sjc12_call_jira_rest_api", "mcp_confluence_search_confluence_pages"],
            "get details for PROJ-5",
        )

        assert report.status == RunStatus.COMPLETED
        assert seen[0]["params"]["arguments"] == {"endpoint": "issue/PROJ-5", "method": "GET"}
        jira, confluence = report.tool_results
        assert jira.output == {"key": "PROJ-5"}
        assert confluence.error_code == "TRANSPORT_NOT_CONFIGURED"

        await app.shutdown()
