# In-memory registry operations
from manage_mcp.models import McpEntry, McpRegistry


def sort_entries(registry: McpRegistry) -> list[tuple[str, McpEntry]]:
    """Return (name, entry) pairs ordered by name."""
    return sorted(registry.items(), key=lambda item: item[0])


def add_entry(registry: McpRegistry, name: str, entry: McpEntry) -> McpRegistry:
    """Return a new registry with `name` set to `entry`.

    ABOUTME: Replaces an existing entry with the same name
    ABOUTME: Returns new dict (doesn't mutate input)
    """
    result = dict(registry)
    result[name] = entry
    return result


def remove_entry(registry: McpRegistry, name: str) -> McpRegistry:
    """Return a new registry without `name` (no-op if absent)."""
    return {key: value for key, value in registry.items() if key != name}
