# Tests for in-memory registry operations
from manage_mcp.models import McpEntry
from manage_mcp.registry import add_entry, remove_entry, sort_entries


def test_sort_entries_by_name():
    registry = {
        "zeta": McpEntry(command="z"),
        "alpha": McpEntry(command="a"),
        "Beta": McpEntry(command="b"),
    }

    assert [name for name, _ in sort_entries(registry)] == ["Beta", "alpha", "zeta"]


def test_add_entry_returns_new_dict():
    """Test add_entry doesn't mutate its input."""
    registry = {"fs": McpEntry(command="npx")}

    updated = add_entry(registry, "gh", McpEntry(command="gh"))

    assert set(updated) == {"fs", "gh"}
    assert set(registry) == {"fs"}


def test_add_entry_replaces_existing():
    registry = {"fs": McpEntry(command="old")}

    updated = add_entry(registry, "fs", McpEntry(command="new"))

    assert updated["fs"].command == "new"


def test_remove_entry():
    registry = {"fs": McpEntry(command="npx"), "gh": McpEntry(command="gh")}

    updated = remove_entry(registry, "fs")

    assert set(updated) == {"gh"}
    assert set(registry) == {"fs", "gh"}


def test_remove_missing_entry_is_noop():
    registry = {"fs": McpEntry(command="npx")}

    assert remove_entry(registry, "missing") == registry
