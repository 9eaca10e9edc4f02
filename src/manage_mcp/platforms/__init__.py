# Platform adapter registry
from pathlib import Path

from manage_mcp.platforms.base import FileToolAdapter
from manage_mcp.platforms.claude_code import ClaudeCodeAdapter
from manage_mcp.platforms.claude_desktop import ClaudeDesktopAdapter
from manage_mcp.platforms.codex import CodexAdapter
from manage_mcp.platforms.cursor import CursorAdapter
from manage_mcp.results import UnsupportedToolError

# Closed set of supported tools, keyed by CLI name
ALL_PLATFORMS: dict[str, type[FileToolAdapter]] = {
    ClaudeCodeAdapter.tool_name: ClaudeCodeAdapter,
    ClaudeDesktopAdapter.tool_name: ClaudeDesktopAdapter,
    CursorAdapter.tool_name: CursorAdapter,
    CodexAdapter.tool_name: CodexAdapter,
}

TOOL_NAMES: tuple[str, ...] = tuple(ALL_PLATFORMS)

__all__ = [
    "FileToolAdapter",
    "ClaudeCodeAdapter",
    "ClaudeDesktopAdapter",
    "CursorAdapter",
    "CodexAdapter",
    "ALL_PLATFORMS",
    "TOOL_NAMES",
    "resolve_platform",
]


def resolve_platform(tool: str, home: Path | None = None) -> FileToolAdapter:
    """Instantiate the adapter for a tool name.

    ABOUTME: Lookup in a fixed mapping, no dynamic loading
    ABOUTME: Names are matched exactly (e.g. "ClaudeCode")

    Raises:
        UnsupportedToolError: If the tool has no adapter
    """
    platform_cls = ALL_PLATFORMS.get(tool)
    if platform_cls is None:
        raise UnsupportedToolError(
            f"Unsupported tool: {tool}. Supported tools: {', '.join(TOOL_NAMES)}"
        )
    return platform_cls(home=home)
