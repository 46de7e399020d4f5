"""Tool catalog - definitions of every invocable remote tool."""

from .builtin import builtin_tools
from .catalog import ToolCatalog
from .discovery import DiscoveryResult, ToolDiscovery, derive_capabilities, tool_from_descriptor
from .formatters import format_tool_detail, format_tool_list
from .store import CatalogStore, NullCatalogStore, YamlCatalogStore
from .types import KNOWN_REMOTE_TOOL_NAMES, LoadResult, Tool, resolve_remote_name

__all__ = [
    "Tool",
    "ToolCatalog",
    "LoadResult",
    "builtin_tools",
    "resolve_remote_name",
    "KNOWN_REMOTE_TOOL_NAMES",
    # Persistence
    "CatalogStore",
    "YamlCatalogStore",
    "NullCatalogStore",
    # Discovery
    "ToolDiscovery",
    "DiscoveryResult",
    "derive_capabilities",
    "tool_from_descriptor",
    # Formatting
    "format_tool_list",
    "format_tool_detail",
]
