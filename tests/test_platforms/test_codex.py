# Tests for Codex CLI platform adapter
from pathlib import Path

import tomli

from manage_mcp.models import McpEntry
from manage_mcp.platforms.codex import CodexAdapter


def test_codex_adapter_properties(tmp_path: Path) -> None:
    """Test adapter name and default config path."""
    adapter = CodexAdapter(home=tmp_path)

    assert adapter.name == "Codex"
    assert adapter.config_path == tmp_path / ".codex" / "config.toml"


def test_codex_read_missing(tmp_path: Path) -> None:
    result = CodexAdapter(home=tmp_path).read_source()

    assert not result.success
    assert result.error.kind == "SourceMissing"


def test_codex_read_servers(tmp_path: Path) -> None:
    """Test loading existing servers from the mcp_servers table."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """model = "o4-mini"

[mcp_servers.filesystem]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-filesystem", "/projects"]

[mcp_servers.github]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-github"]
env = { GITHUB_TOKEN = "ghp_xxxx" }
"""
    )

    result = CodexAdapter(config_path=config_file).read_source()

    assert result.success
    entries = result.value.entries
    assert entries["filesystem"] == McpEntry(
        command="npx",
        args=["-y", "@modelcontextprotocol/server-filesystem", "/projects"],
    )
    assert entries["github"].env == {"GITHUB_TOKEN": "ghp_xxxx"}


def test_codex_ignores_camel_case_key(tmp_path: Path) -> None:
    """Test mcpServers is not the Codex key."""
    config_file = tmp_path / "config.toml"
    config_file.write_text('[mcpServers.fs]\ncommand = "npx"\n')

    result = CodexAdapter(config_path=config_file).read_source()

    assert result.value.entries == {}


def test_codex_read_invalid_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("invalid [toml")

    result = CodexAdapter(config_path=config_file).read_source()

    assert not result.success
    assert result.error.kind == "ParseFailed"
    assert "Invalid TOML" in result.error.message


def test_codex_write_creates_file(tmp_path: Path) -> None:
    """Test saving creates config file and parent directory if missing."""
    adapter = CodexAdapter(home=tmp_path)

    result = adapter.write({"fs": McpEntry(command="npx", args=["-y", "server"])})

    assert result.success
    data = tomli.loads(adapter.config_path.read_text())
    assert data == {"mcp_servers": {"fs": {"command": "npx", "args": ["-y", "server"]}}}


def test_codex_write_preserves_other_settings(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """model = "o4-mini"
approval_policy = "on-request"

[mcp_servers.stale]
command = "old"

[profiles.fast]
model = "gpt-4.1"
"""
    )

    CodexAdapter(config_path=config_file).write({
        "github": McpEntry(command="npx", env={"GITHUB_TOKEN": "ghp_xxxx"}),
        "project[app].fs": McpEntry(command="fs", project_path="/workspace/app"),
    })

    data = tomli.loads(config_file.read_text())
    assert data["model"] == "o4-mini"
    assert data["approval_policy"] == "on-request"
    assert data["profiles"] == {"fast": {"model": "gpt-4.1"}}
    assert data["mcp_servers"] == {
        "github": {"command": "npx", "env": {"GITHUB_TOKEN": "ghp_xxxx"}},
    }


def test_codex_write_invalid_existing(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("invalid [toml")

    result = CodexAdapter(config_path=config_file).write({"fs": McpEntry(command="npx")})

    assert not result.success
    assert result.error.kind == "ParseFailed"
    assert config_file.read_text() == "invalid [toml"
