"""Unit tests for YamlCatalogStore."""

import threading

import pytest
import yaml

from relay_core.catalog import CatalogStore, NullCatalogStore, Tool, ToolCatalog, YamlCatalogStore


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "catalog" / "tools.yaml"


@pytest.fixture
def tool() -> Tool:
    return Tool.create(
        name="mcp_jira-sjc12_add_labels",
        category="jira",
        description="Add labels to a Jira issue",
        capabilities=["labels", "add"],
        required_inputs=["issue_key", "labels"],
    )


class TestYamlCatalogStore:
    """Tests for the YAML-backed store."""

    def test_satisfies_protocol(self, store_path):
        assert isinstance(YamlCatalogStore(store_path), CatalogStore)
        assert isinstance(NullCatalogStore(), CatalogStore)

    def test_load_missing_file(self, store_path):
        """A store with no file yet is empty."""
        assert YamlCatalogStore(store_path).load_all() == []

    def test_save_and_load(self, store_path, tool):
        """Test tools survive a save/load cycle."""
        store = YamlCatalogStore(store_path)
        store.save_all([tool])

        loaded = YamlCatalogStore(store_path).load_all()

        assert loaded == [tool]
        data = yaml.safe_load(store_path.read_text())
        assert data["tools"][0]["required_inputs"] == ["issue_key", "labels"]

    def test_save_upserts(self, store_path, tool):
        """Saving merges by name instead of replacing the file."""
        store = YamlCatalogStore(store_path)
        other = Tool.create(name="who_am_i", category="webex")
        store.save_all([tool])
        store.save_all([other])

        assert [t.name for t in store.load_all()] == [tool.name, "who_am_i"]

    def test_delete(self, store_path, tool):
        store = YamlCatalogStore(store_path)
        store.save_all([tool])
        store.delete(tool.name)
        assert store.load_all() == []

    def test_invalid_entries_skipped(self, store_path):
        """Entries without a name or category are ignored."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text("tools:\n  - name: only_name\n  - name: ok\n    category: jira\n")

        loaded = YamlCatalogStore(store_path).load_all()

        assert [t.name for t in loaded] == ["ok"]

    def test_catalog_persists_through_store(self, store_path, tool):
        """A catalog reloaded from the same file sees earlier registrations."""
        first = ToolCatalog()
        first.load(YamlCatalogStore(store_path), [])
        first.register(tool)

        second = ToolCatalog()
        result = second.load(YamlCatalogStore(store_path), [])

        assert second.lookup(tool.name) == tool
        assert result.from_store == 1


class TestYamlCatalogStoreConcurrency:
    """Concurrent writers sharing one store."""

    def test_concurrent_registrations_are_all_persisted(self, store_path):
        """Every tool registered from parallel threads reaches the file."""
        store = YamlCatalogStore(store_path)
        catalog = ToolCatalog()
        catalog.load(store, [])
        barrier = threading.Barrier(16)
        errors: list[Exception] = []

        def register_batch(worker: int) -> None:
            try:
                barrier.wait()
                for index in range(5):
                    catalog.register(Tool.create(name=f"tool_{worker}_{index}", category="jira"))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=register_batch, args=(n,)) for n in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(catalog) == 80
        assert len(YamlCatalogStore(store_path).load_all()) == 80

    def test_concurrent_saves_and_deletes(self, store_path):
        """Deletes racing with saves only remove the deleted names."""
        store = YamlCatalogStore(store_path)
        doomed = [Tool.create(name=f"old_{n}", category="jira") for n in range(10)]
        store.save_all(doomed)
        barrier = threading.Barrier(20)

        def save(n: int) -> None:
            barrier.wait()
            store.save_all([Tool.create(name=f"new_{n}", category="jira")])

        def delete(n: int) -> None:
            barrier.wait()
            store.delete(f"old_{n}")

        threads = [threading.Thread(target=save, args=(n,)) for n in range(10)]
        threads += [threading.Thread(target=delete, args=(n,)) for n in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        names = {tool.name for tool in store.load_all()}
        assert names == {f"new_{n}" for n in range(10)}
