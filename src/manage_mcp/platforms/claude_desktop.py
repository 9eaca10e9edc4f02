# Claude Desktop platform adapter
from manage_mcp.platforms.base import FileToolAdapter


class ClaudeDesktopAdapter(FileToolAdapter):
    """Adapter for Claude Desktop (claude_desktop_config.json).

    ABOUTME: Global scope only; project-scoped entries are not exported
    ABOUTME: Preserves other settings such as globalShortcut
    """

    tool_name = "ClaudeDesktop"
    relative_path = ("Library", "Application Support", "Claude", "claude_desktop_config.json")
