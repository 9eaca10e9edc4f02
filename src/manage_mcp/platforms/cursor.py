# Cursor platform adapter
from manage_mcp.platforms.base import FileToolAdapter


class CursorAdapter(FileToolAdapter):
    """Adapter for Cursor (~/.cursor/mcp.json).

    ABOUTME: Global scope only, mcpServers key
    """

    tool_name = "Cursor"
    relative_path = (".cursor", "mcp.json")
