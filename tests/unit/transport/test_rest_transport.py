"""Unit tests for RestTransport."""

import json

import httpx
import pytest

from relay_core.config.models import TransportDefinition
from relay_core.errors import RelayError
from relay_core.transport import RestTransport
from relay_core.types import TransportProtocol

BASE = "http://webex.local:3001/"


def _transport(handler, **definition) -> RestTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    definition.setdefault("protocol", TransportProtocol.REST)
    return RestTransport("webex", TransportDefinition(url=BASE, **definition), client=client)


class TestRestInvoke:
    """Tests for per-tool POST requests."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        """The argument map is the body; the tool name is in the path."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"result": {"items": []}})

        transport = _transport(handler, token="tok")
        raw = await transport.invoke("list_spaces", {"max": 50})

        assert json.loads(raw) == {"result": {"items": []}}
        request = seen[0]
        assert str(request.url) == "http://webex.local:3001/mcp/tools/list_spaces"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["X-Webex-Token"] == "tok"
        assert json.loads(request.content) == {"max": 50}

    @pytest.mark.asyncio
    async def test_custom_token_header(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        await _transport(handler, token="tok", token_header="X-Other").invoke("who_am_i", {})

        assert seen[0].headers["X-Other"] == "tok"
        assert "X-Webex-Token" not in seen[0].headers

    def test_tool_name_is_quoted(self):
        transport = _transport(lambda request: httpx.Response(200))
        assert transport.tool_url("a/b c") == "http://webex.local:3001/mcp/tools/a%2Fb%20c"

    @pytest.mark.asyncio
    async def test_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="no such tool")

        with pytest.raises(RelayError) as exc_info:
            await _transport(handler).invoke("missing", {})

        assert exc_info.value.status_code == 404
        assert exc_info.value.response_body == "no such tool"


class TestRestListTools:
    """Tests for GET /mcp/tools discovery."""

    @pytest.mark.asyncio
    async def test_array_listing(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/mcp/tools"
            return httpx.Response(200, json=[{"name": "who_am_i"}, {"name": ""}])

        assert await _transport(handler).list_tools() == [{"name": "who_am_i"}]

    @pytest.mark.asyncio
    async def test_wrapped_listing(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"tools": [{"name": "ask_space"}]})

        assert await _transport(handler).list_tools() == [{"name": "ask_space"}]

    @pytest.mark.asyncio
    async def test_malformed_listing(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="[oops")

        with pytest.raises(RelayError) as exc_info:
            await _transport(handler).list_tools()
        assert exc_info.value.code == "MALFORMED_RESPONSE"


class TestRestDefaultClient:
    """Tests for the client a REST transport builds itself."""

    @pytest.mark.asyncio
    async def test_timeouts_and_redirects(self):
        transport = RestTransport("webex", TransportDefinition(url=BASE, protocol=TransportProtocol.REST))

        assert transport._client.timeout.connect == 10
        assert transport._client.timeout.read == 30
        assert transport._client.follow_redirects is True
        await transport.aclose()

    @pytest.mark.asyncio
    async def test_follows_temporary_redirect(self):
        """A moved tool endpoint is followed to its final body."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/mcp/tools/who_am_i":
                return httpx.Response(307, headers={"Location": "/v2/mcp/tools/who_am_i"})
            return httpx.Response(200, json={"displayName": "Dana"})

        transport = RestTransport(
            "webex",
            TransportDefinition(url=BASE, protocol=TransportProtocol.REST),
            http_transport=httpx.MockTransport(handler),
        )
        raw = await transport.invoke("who_am_i", {})

        assert json.loads(raw) == {"displayName": "Dana"}
        await transport.aclose()
