"""Unit tests for Tool and remote-name resolution."""

import dataclasses

import pytest

from relay_core.catalog import Tool, builtin_tools, format_tool_detail, format_tool_list, resolve_remote_name


class TestResolveRemoteName:
    """Tests for resolve_remote_name."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("mcp_jira-sjc12_call_jira_rest_api", "call_jira_rest_api"),
            ("mcp_aicodinggithub_get_pull_request_diff", "get_pull_request_diff"),
            ("mcp_confluence_search_confluence_pages", "search_confluence_pages"),
            ("mcp_custom-server_get_widget", "get_widget"),
            ("mcp_custom_thing", "custom_thing"),
            ("who_am_i", "who_am_i"),
            ("jira-sjc12_get_issue", "get_issue"),
            ("mcp_x_get_call_widget", "call_widget"),
            ("search_spaces_by_name", "search_spaces_by_name"),
        ],
    )
    def test_resolution(self, name, expected):
        assert resolve_remote_name(name) == expected

    def test_explicit_remote_name_wins(self):
        tool = Tool.create(name="mcp_x_call_jira_rest_api", category="jira", remote_name="other")
        assert tool.remote_tool_name() == "other"


class TestTool:
    """Tests for the Tool value type."""

    def test_immutable(self):
        """Tools cannot be mutated after creation."""
        tool = Tool.create(name="a", category="jira")
        with pytest.raises(dataclasses.FrozenInstanceError):
            tool.name = "b"  # type: ignore[misc]

    def test_dict_round_trip(self):
        tool = Tool.create(
            name="a", category="jira", capabilities=["x", "y"], required_inputs=["k"], remote_name="r"
        )
        assert Tool.from_dict(tool.to_dict()) == tool

    def test_from_dict_requires_name(self):
        with pytest.raises(KeyError):
            Tool.from_dict({"category": "jira"})


class TestBuiltinTools:
    """Tests for the built-in tool set."""

    def test_names_unique(self):
        names = [tool.name for tool in builtin_tools()]
        assert len(names) == len(set(names))

    def test_categories(self):
        assert {tool.category for tool in builtin_tools()} == {
            "jira",
            "confluence",
            "github",
            "webex",
        }

    def test_jira_rest_api_inputs(self):
        tool = next(t for t in builtin_tools() if t.name == "mcp_jira-sjc12_call_jira_rest_api")
        assert tool.required_inputs == ("endpoint", "method")
        assert tool.remote_tool_name() == "call_jira_rest_api"

    def test_webex_tools_keep_their_names(self):
        """REST tools are called by their catalog name."""
        for tool in builtin_tools():
            if tool.category == "webex":
                assert tool.remote_tool_name() == tool.name


class TestFormatters:
    """Tests for CLI formatters."""

    def test_empty_list(self):
        assert format_tool_list([]) == "No tools found."

    def test_list(self):
        output = format_tool_list(builtin_tools()[:2])
        assert output.startswith("Found 2 tool(s):")
        assert "[jira]" in output

    def test_detail(self):
        tool = Tool.create(name="mcp_jira_add_labels", category="jira", required_inputs=["issue_key"])
        output = format_tool_detail(tool)
        assert "Remote name:  add_labels" in output
        assert "Required:     issue_key" in output
        assert "Capabilities: -" in output
