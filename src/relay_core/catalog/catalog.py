"""Tool catalog - thread-safe registry of invocable tools."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Any

from relay_core.errors import create_error
from relay_core.logging.logger import RelayLogger
from relay_core.telemetry import get_metrics
from relay_core.types import LogLevel

from .store import CatalogStore
from .types import LoadResult, Tool


class ToolCatalog:
    """Central catalog of tools keyed by name.

    Reads and writes are guarded by a re-entrant lock. Store calls happen
    outside the lock and never fail a catalog operation.
    """

    def __init__(
        self,
        store: CatalogStore | None = None,
        logger: RelayLogger | None = None,
    ):
        """Initialize tool catalog.

        Args:
            store: Optional backing store for best-effort persistence
            logger: Optional logger
        """
        self._tools: dict[str, Tool] = {}
        self._lock = threading.RLock()
        self._store = store
        self._logger = logger

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        """Log message if logger available."""
        if self._logger:
            self._logger._log(level, "catalog", message, kwargs or None)

    def load(self, store: CatalogStore | None, seed_tools: Iterable[Tool]) -> LoadResult:
        """Initialize the catalog from a store merged with seed tools.

        Stored tools win over seed tools of the same name. Seed tools missing
        from the store are persisted back to it.

        Args:
            store: Store to read from (also becomes the catalog's store)
            seed_tools: Built-in and configured tools

        Returns:
            LoadResult summary
        """
        if store is not None:
            self._store = store
        seeds = list(seed_tools)

        if self._store is None:
            self.register_many(seeds)
            return LoadResult(total_tools=len(self), from_store=0)

        try:
            stored = self._store.load_all()
        except Exception as e:
            self._log(
                LogLevel.WARN,
                f"Failed to load tools from store, using configured tools: {e}",
            )
            self._register_locally(seeds)
            return LoadResult(total_tools=len(self), from_store=0, store_error=str(e))

        merged: dict[str, Tool] = {tool.name: tool for tool in stored}
        missing = [tool for tool in seeds if tool.name not in merged]
        for tool in missing:
            merged[tool.name] = tool
        self._register_locally(merged.values())

        if missing:
            self._persist(missing, f"Seeded {len(missing)} tools into store")

        self._log(LogLevel.INFO, f"Tool catalog initialized with {len(self)} tools")
        return LoadResult(
            total_tools=len(self),
            from_store=len(stored),
            seeded=[tool.name for tool in missing],
        )

    def register(self, tool: Tool) -> None:
        """Insert or overwrite a tool by name.

        Args:
            tool: Tool to register
        """
        self._register_locally([tool])
        self._persist([tool])

    def register_many(self, tools: Iterable[Tool]) -> None:
        batch = list(tools)
        self._register_locally(batch)
        if batch:
            self._persist(batch)

    def lookup(self, name: str) -> Tool | None:
        """Get tool by name.

        Args:
            name: Tool name

        Returns:
            Tool if registered, None otherwise
        """
        with self._lock:
            return self._tools.get(name)

    def get_or_raise(self, name: str) -> Tool:
        """Get tool or raise error.

        Raises:
            RelayError: TOOL_NOT_IN_CATALOG if absent
        """
        tool = self.lookup(name)
        if tool is None:
            raise create_error("TOOL_NOT_IN_CATALOG", tool_name=name)
        return tool

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._tools

    def list_all(self) -> list[Tool]:
        """List all tools in registration order."""
        with self._lock:
            return list(self._tools.values())

    def list_by_category(self, category: str) -> list[Tool]:
        """List tools of one category (case-insensitive).

        Args:
            category: Category name

        Returns:
            Matching tools in registration order
        """
        wanted = category.lower()
        with self._lock:
            return [tool for tool in self._tools.values() if tool.category.lower() == wanted]

    def group_by_category(self) -> dict[str, list[Tool]]:
        grouped: dict[str, list[Tool]] = {}
        for tool in self.list_all():
            grouped.setdefault(tool.category, []).append(tool)
        return grouped

    def find_by_keywords(self, keywords: Iterable[str]) -> list[Tool]:
        """Find tools whose capabilities or description mention any keyword.

        Args:
            keywords: Words to look for (case-insensitive)

        Returns:
            Matching tools in registration order
        """
        wanted = [keyword.lower() for keyword in keywords if keyword]
        if not wanted:
            return []

        matches = []
        for tool in self.list_all():
            description = tool.description.lower()
            capabilities = [capability.lower() for capability in tool.capabilities]
            for keyword in wanted:
                if keyword in description or any(keyword in cap for cap in capabilities):
                    matches.append(tool)
                    break
        return matches

    def remove(self, name: str) -> bool:
        """Remove a tool.

        Args:
            name: Tool name

        Returns:
            True if the tool was present
        """
        with self._lock:
            removed = self._tools.pop(name, None) is not None
            self._refresh_size()
        if removed and self._store is not None:
            try:
                self._store.delete(name)
            except Exception as e:
                self._log(LogLevel.WARN, f"Failed to delete '{name}' from store: {e}")
        return removed

    def update(self, name: str, tool: Tool) -> bool:
        """Replace a tool, renaming it when the new name differs.

        Args:
            name: Current tool name
            tool: Replacement tool

        Returns:
            False if no tool named ``name`` exists
        """
        with self._lock:
            if name not in self._tools:
                return False
            if tool.name != name:
                del self._tools[name]
            self._tools[tool.name] = tool
            self._refresh_size()

        if tool.name != name and self._store is not None:
            try:
                self._store.delete(name)
            except Exception as e:
                self._log(LogLevel.WARN, f"Failed to delete '{name}' from store: {e}")
        self._persist([tool])
        return True

    def clear(self) -> None:
        """Drop every tool from memory. The store is left untouched."""
        with self._lock:
            self._tools.clear()
            self._refresh_size()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def _register_locally(self, tools: Iterable[Tool]) -> None:
        with self._lock:
            for tool in tools:
                self._tools[tool.name] = tool
            self._refresh_size()

    def _persist(self, tools: list[Tool], success_message: str | None = None) -> None:
        if self._store is None:
            return
        try:
            self._store.save_all(tools)
        except Exception as e:
            self._log(LogLevel.WARN, f"Failed to persist {len(tools)} tools to store: {e}")
            return
        if success_message:
            self._log(LogLevel.INFO, success_message)

    def _refresh_size(self) -> None:
        # Called with the lock held so gauge deltas apply in order.
        metrics = get_metrics()
        if metrics:
            metrics.set_catalog_size(len(self._tools))
