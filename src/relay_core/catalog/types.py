"""Tool catalog types."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

# Tool names as the remote servers know them. Catalog names carry a server
# prefix (e.g. mcp_jira-sjc12_call_jira_rest_api) that the servers do not.
KNOWN_REMOTE_TOOL_NAMES = (
    "call_jira_rest_api",
    "add_labels",
    "get_field_info",
    "search_confluence_pages",
    "get_confluence_page_by_id",
    "get_confluence_page_by_title",
    "get_confluence_page_by_url",
    "call_confluence_rest_api",
    "call_github_graphql_for_query",
    "get_pull_request_diff",
    "call_github_restapi_for_search",
    "call_github_graphql_for_mutation",
)

REMOTE_NAME_PREFIXES = ("call_", "add_", "get_", "search_")


def resolve_remote_name(name: str) -> str:
    """Derive the remote tool name from a catalog name.

    Args:
        name: Catalog name, possibly carrying a server prefix

    Returns:
        Name to send in the tools/call request
    """
    for known in KNOWN_REMOTE_TOOL_NAMES:
        if name.endswith(known):
            return known

    stripped = name[len("mcp_") :] if name.startswith("mcp_") else name

    # Prefixes are tried in order; the first one present wins.
    for prefix in REMOTE_NAME_PREFIXES:
        index = stripped.find(prefix)
        if index >= 0:
            return stripped[index:]
    return stripped


@dataclass(frozen=True)
class Tool:
    """An invocable remote tool.

    Immutable once registered; replacing a tool means registering a new
    instance under the same name.
    """

    name: str
    description: str
    category: str
    capabilities: frozenset[str] = field(default_factory=frozenset)
    required_inputs: tuple[str, ...] = ()
    remote_name: str | None = None

    @classmethod
    def create(
        cls,
        name: str,
        category: str,
        description: str = "",
        capabilities: Iterable[str] = (),
        required_inputs: Iterable[str] = (),
        remote_name: str | None = None,
    ) -> "Tool":
        """Build a Tool from plain iterables."""
        return cls(
            name=name,
            description=description,
            category=category,
            capabilities=frozenset(capabilities),
            required_inputs=tuple(required_inputs),
            remote_name=remote_name,
        )

    def remote_tool_name(self) -> str:
        """Name the remote server expects for this tool."""
        return self.remote_name or resolve_remote_name(self.name)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "capabilities": sorted(self.capabilities),
            "required_inputs": list(self.required_inputs),
        }
        if self.remote_name:
            data["remote_name"] = self.remote_name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tool":
        """Build a Tool from its serialized form.

        Raises:
            KeyError: If name or category is missing
        """
        return cls.create(
            name=data["name"],
            category=data["category"],
            description=data.get("description") or "",
            capabilities=data.get("capabilities") or (),
            required_inputs=data.get("required_inputs") or (),
            remote_name=data.get("remote_name"),
        )


@dataclass
class LoadResult:
    """Summary of catalog initialization."""

    total_tools: int
    from_store: int
    seeded: list[str] = field(default_factory=list)
    store_error: str | None = None
