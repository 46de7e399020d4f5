"""Deterministic, category-specific argument heuristics."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from relay_core.catalog.types import Tool

from .extraction import (
    PAGE_ID_PATTERN,
    URL_PATTERN,
    build_jql,
    detect_operation,
    extract_assignee,
    extract_comment_text,
    extract_field_update,
    extract_issue_key,
    extract_labels,
    extract_pull_request,
    extract_quoted,
)
from .types import JiraOperation

JIRA_SEARCH_MAX_RESULTS = 50
CONFLUENCE_SEARCH_LIMIT = 25
WEBEX_LIST_MAX = 50

# Webex inputs that take the raw query
WEBEX_QUERY_INPUTS = ("question", "searchTerm")

CategoryBuilder = Callable[[Tool, str, dict[str, Any]], None]


class HeuristicArgumentBuilder:
    """Fills call arguments from query patterns.

    Builders mutate the argument map with set-if-absent semantics, so values
    already present are never overwritten.
    """

    def __init__(self) -> None:
        self._builders: dict[str, CategoryBuilder] = {
            "jira": self._build_jira,
            "confluence": self._build_confluence,
            "github": self._build_github,
            "webex": self._build_webex,
        }

    def register(self, category: str, builder: CategoryBuilder) -> None:
        """Add or replace the builder for a category."""
        self._builders[category.lower()] = builder

    def build(
        self,
        tool: Tool,
        query: str | None,
        arguments: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build arguments for a tool call.

        Args:
            tool: Tool being called
            query: Free-text query
            arguments: Optional starting map; never overwritten

        Returns:
            New argument map
        """
        result = dict(arguments or {})
        query = (query or "").strip()
        if not query:
            return result

        builder = self._builders.get(tool.category.lower())
        if builder is None:
            result.setdefault("query", query)
            return result

        builder(tool, query, result)
        return result

    # Jira

    def _build_jira(self, tool: Tool, query: str, arguments: dict[str, Any]) -> None:
        name = tool.remote_tool_name()
        issue_key = extract_issue_key(query)

        if "call_jira_rest_api" in name:
            if "endpoint" not in arguments:
                self._shape_jira_rest_call(query, issue_key, arguments)
            return

        if "add_labels" in name:
            if issue_key:
                arguments.setdefault("issue_key", issue_key)
            labels = extract_labels(query)
            if labels:
                arguments.setdefault("labels", labels)
            return

        if "get_field_info" in name:
            if "search_term" not in arguments and "field_names" not in arguments:
                arguments["search_term"] = query
            return

        if issue_key:
            arguments.setdefault("issue_key", issue_key)
        else:
            arguments.setdefault("query", query)

    def _shape_jira_rest_call(
        self,
        query: str,
        issue_key: str | None,
        arguments: dict[str, Any],
    ) -> None:
        operation = detect_operation(query, issue_key)

        if operation == JiraOperation.SEARCH:
            arguments["endpoint"] = "search"
            arguments["method"] = "GET"
            params = dict(arguments.get("params") or {})
            params.setdefault("jql", build_jql(query, arguments.get("project")))
            params.setdefault("maxResults", JIRA_SEARCH_MAX_RESULTS)
            arguments["params"] = params
            return

        endpoint = f"issue/{issue_key}"

        if operation == JiraOperation.COMMENT:
            body = extract_comment_text(query) or query
            arguments.update(endpoint=f"{endpoint}/comment", method="POST")
            arguments.setdefault("data", {"body": body})
        elif operation == JiraOperation.ASSIGN:
            arguments.update(endpoint=f"{endpoint}/assignee", method="PUT")
            arguments.setdefault("data", {"name": extract_assignee(query)})
        elif operation == JiraOperation.UPDATE_FIELD:
            field, value = extract_field_update(query) or ("summary", query)
            arguments.update(endpoint=endpoint, method="PUT")
            arguments.setdefault("data", {"fields": {field: value}})
        elif operation == JiraOperation.TRANSITIONS:
            arguments.update(endpoint=f"{endpoint}/transitions", method="GET")
        else:
            arguments.update(endpoint=endpoint, method="GET")

    # Confluence

    def _build_confluence(self, tool: Tool, query: str, arguments: dict[str, Any]) -> None:
        name = tool.remote_tool_name()
        escaped = query.replace('"', '\\"')

        if "search_confluence_pages" in name:
            arguments.setdefault("cql_query", f'text ~ "{escaped}"')
            arguments.setdefault("limit", CONFLUENCE_SEARCH_LIMIT)
        elif "page_by_id" in name:
            match = PAGE_ID_PATTERN.search(query)
            if match:
                arguments.setdefault("page_id", match.group(1))
        elif "page_by_url" in name:
            match = URL_PATTERN.search(query)
            if match:
                arguments.setdefault("page_url", match.group(0).rstrip(".,)"))
        elif "page_by_title" in name:
            title = extract_quoted(query)
            if title:
                arguments.setdefault("title", title)
        elif "call_confluence_rest_api" in name:
            if "endpoint" not in arguments:
                arguments["endpoint"] = "content/search"
                arguments["method"] = "GET"
                arguments.setdefault("params", {"cql": f'text ~ "{escaped}"'})
        else:
            arguments.setdefault("query", query)

    # GitHub

    def _build_github(self, tool: Tool, query: str, arguments: dict[str, Any]) -> None:
        name = tool.remote_tool_name()

        if "restapi_for_search" in name:
            arguments.setdefault("resource", "code")
            arguments.setdefault("parameters", {"q": query})
        elif "graphql" in name:
            arguments.setdefault("graphql", query)
        elif "pull_request_diff" in name:
            for key, value in (extract_pull_request(query) or {}).items():
                arguments.setdefault(key, value)
        else:
            arguments.setdefault("query", query)

    # Webex

    def _build_webex(self, tool: Tool, query: str, arguments: dict[str, Any]) -> None:
        name = tool.remote_tool_name()

        for input_name in WEBEX_QUERY_INPUTS:
            if input_name in tool.required_inputs:
                arguments.setdefault(input_name, query)

        if name.startswith("list_"):
            arguments.setdefault("max", WEBEX_LIST_MAX)
