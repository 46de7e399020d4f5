"""Catalog persistence port and YAML file store."""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

import yaml

from .types import Tool

logger = logging.getLogger(__name__)


@runtime_checkable
class CatalogStore(Protocol):
    """Backing store for catalog tools.

    Implementations may raise on any call; the catalog treats every store
    call as best-effort.
    """

    def load_all(self) -> list[Tool]: ...

    def save_all(self, tools: list[Tool]) -> None: ...

    def delete(self, name: str) -> None: ...


class NullCatalogStore:
    """Store that keeps nothing."""

    def load_all(self) -> list[Tool]:
        return []

    def save_all(self, tools: list[Tool]) -> None:
        return None

    def delete(self, name: str) -> None:
        return None


class YamlCatalogStore:
    """Catalog store backed by a single YAML file.

    File layout::

        tools:
          - name: mcp_jira-sjc12_add_labels
            category: jira
            description: ...
            capabilities: [add, labels]
            required_inputs: [issue_key, labels]
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: YAML file location; created on first save
        """
        self._path = Path(path).expanduser()
        self._write_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load_all(self) -> list[Tool]:
        """Read every tool from the file.

        Entries that cannot be parsed are logged and skipped.

        Returns:
            Tools in file order; empty when the file does not exist

        Raises:
            yaml.YAMLError: If the file is not valid YAML
        """
        if not self._path.exists():
            return []

        with self._path.open() as f:
            data = yaml.safe_load(f) or {}

        tools: list[Tool] = []
        for entry in data.get("tools") or []:
            try:
                tools.append(Tool.from_dict(entry))
            except (KeyError, TypeError, AttributeError) as e:
                logger.error(f"Invalid tool entry in {self._path}: {e}")
        logger.info(f"Loaded {len(tools)} tools from {self._path}")
        return tools

    def save_all(self, tools: list[Tool]) -> None:
        """Upsert tools by name and rewrite the file atomically.

        Concurrent calls on the same store are serialized.

        Args:
            tools: Tools to insert or replace
        """
        with self._write_lock:
            existing = {tool.name: tool for tool in self.load_all()}
            for tool in tools:
                existing[tool.name] = tool
            self._write(list(existing.values()))

    def delete(self, name: str) -> None:
        with self._write_lock:
            remaining = [tool for tool in self.load_all() if tool.name != name]
            self._write(remaining)

    def _write(self, tools: list[Tool]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"tools": [tool.to_dict() for tool in tools]}

        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(payload, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
