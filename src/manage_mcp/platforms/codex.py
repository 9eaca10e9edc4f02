# Codex CLI platform adapter
from typing import Any

import tomli
import tomli_w

from manage_mcp.platforms.base import FileToolAdapter


class CodexAdapter(FileToolAdapter):
    """Adapter for Codex CLI (~/.codex/config.toml).

    ABOUTME: Uses snake_case mcp_servers key (not mcpServers)
    ABOUTME: Parses with tomli, writes the whole document back with tomli_w
    ABOUTME: Global scope only
    """

    tool_name = "Codex"
    servers_key = "mcp_servers"
    relative_path = (".codex", "config.toml")
    format_label = "TOML"
    decode_errors = (tomli.TOMLDecodeError,)

    def parse(self, text: str) -> Any:
        return tomli.loads(text)

    def serialize(self, document: dict[str, Any]) -> str:
        return tomli_w.dumps(document)
