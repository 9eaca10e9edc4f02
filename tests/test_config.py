# Tests for registry location and persistence
import json
import os
from pathlib import Path

import pytest

from manage_mcp.config import (
    CONFIG_DIR_ENV,
    read_registry,
    resolve_config_paths,
    write_registry,
)
from manage_mcp.models import McpEntry


class TestResolveConfigPaths:
    """Tests for resolve_config_paths function."""

    def test_default_under_home(self, tmp_path: Path) -> None:
        """Test default location is <home>/.manage_mcp/mcp.json."""
        paths = resolve_config_paths({}, tmp_path)

        assert paths.config_dir == tmp_path / ".manage_mcp"
        assert paths.config_file == tmp_path / ".manage_mcp" / "mcp.json"
        assert paths.backup_file == tmp_path / ".manage_mcp" / "mcp.json.bak"

    def test_env_override(self, tmp_path: Path) -> None:
        """Test MCP_CONFIG_DIR wins over home."""
        custom = tmp_path / "custom"
        paths = resolve_config_paths({CONFIG_DIR_ENV: str(custom)}, tmp_path / "home")

        assert paths.config_file == custom / "mcp.json"
        assert paths.backup_file == custom / "mcp.json.bak"

    def test_empty_override_is_ignored(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({CONFIG_DIR_ENV: ""}, tmp_path)
        assert paths.config_dir == tmp_path / ".manage_mcp"


class TestReadRegistry:
    """Tests for read_registry function."""

    def test_missing_file_initializes(self, tmp_path: Path) -> None:
        """Test a missing registry reads as empty and initialized."""
        result = read_registry(resolve_config_paths({}, tmp_path))

        assert result.success
        assert result.value.registry == {}
        assert result.value.source == "initialized"

    def test_reads_existing_entries(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({}, tmp_path)
        paths.config_dir.mkdir()
        paths.config_file.write_text(json.dumps({
            "mcpServers": {
                "fs": {"command": "npx", "args": ["-y", "server"]},
                "remote": {"type": "sse", "url": "https://example.com/sse"},
            }
        }))

        result = read_registry(paths)

        assert result.success
        assert result.value.source == "existing"
        assert result.value.registry["fs"] == McpEntry(command="npx", args=["-y", "server"])
        assert result.value.registry["remote"].url == "https://example.com/sse"

    def test_missing_servers_key_is_empty(self, tmp_path: Path) -> None:
        """Test a document without mcpServers is an empty registry."""
        paths = resolve_config_paths({}, tmp_path)
        paths.config_dir.mkdir()
        paths.config_file.write_text("{}")

        result = read_registry(paths)

        assert result.success
        assert result.value.registry == {}
        assert result.value.source == "existing"

    def test_invalid_json(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({}, tmp_path)
        paths.config_dir.mkdir()
        paths.config_file.write_text("{ invalid json }")

        result = read_registry(paths)

        assert not result.success
        assert result.error.kind == "InvalidJSON"

    def test_top_level_not_object(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({}, tmp_path)
        paths.config_dir.mkdir()
        paths.config_file.write_text("[]")

        result = read_registry(paths)

        assert not result.success
        assert result.error.kind == "InvalidFormat"

    def test_servers_not_object(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({}, tmp_path)
        paths.config_dir.mkdir()
        paths.config_file.write_text(json.dumps({"mcpServers": ["fs"]}))

        result = read_registry(paths)

        assert not result.success
        assert result.error.kind == "InvalidFormat"

    def test_invalid_entry(self, tmp_path: Path) -> None:
        """Test an entry failing validation fails the whole load."""
        paths = resolve_config_paths({}, tmp_path)
        paths.config_dir.mkdir()
        paths.config_file.write_text(json.dumps({
            "mcpServers": {"fs": {"command": "npx"}, "bad": {"args": ["x"]}}
        }))

        result = read_registry(paths)

        assert not result.success
        assert result.error.kind == "InvalidFormat"
        assert "bad.command" in result.error.message

    def test_non_string_project_path(self, tmp_path: Path) -> None:
        """Test a numeric project_path is rejected at load time."""
        paths = resolve_config_paths({}, tmp_path)
        paths.config_dir.mkdir()
        paths.config_file.write_text(json.dumps({
            "mcpServers": {"x": {"command": "n", "project_path": 5}}
        }))

        result = read_registry(paths)

        assert not result.success
        assert result.error.kind == "InvalidFormat"
        assert "x.project_path" in result.error.message

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX non-root")
    def test_permission_denied(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({}, tmp_path)
        paths.config_dir.mkdir()
        paths.config_file.write_text("{}")
        paths.config_file.chmod(0o000)

        try:
            result = read_registry(paths)
        finally:
            paths.config_file.chmod(0o644)

        assert not result.success
        assert result.error.kind == "PermissionDenied"


class TestWriteRegistry:
    """Tests for write_registry function."""

    def test_creates_directory_and_file(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({CONFIG_DIR_ENV: str(tmp_path / "a" / "b")})

        result = write_registry(paths, {"fs": McpEntry(command="npx")})

        assert result.success
        data = json.loads(paths.config_file.read_text())
        assert data == {"mcpServers": {"fs": {"command": "npx"}}}

    def test_formatting(self, tmp_path: Path) -> None:
        """Test 2-space indentation and trailing newline."""
        paths = resolve_config_paths({}, tmp_path)

        write_registry(paths, {"fs": McpEntry(command="npx")})

        text = paths.config_file.read_text()
        assert text.endswith("\n")
        assert '\n  "mcpServers": {\n    "fs": {' in text

    def test_write_then_read_round_trip(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({}, tmp_path)
        registry = {
            "fs": McpEntry(command="npx", args=["-y"], env={"A": "1"}),
            "project[app].db": McpEntry(command="db", project_path="/workspace/app"),
            "remote": McpEntry(type="http", url="https://example.com", headers={"X": "y"}),
        }

        write_registry(paths, registry)
        result = read_registry(paths)

        assert result.success
        assert result.value.registry == registry

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        paths = resolve_config_paths({}, tmp_path)

        write_registry(paths, {"fs": McpEntry(command="npx")})
        write_registry(paths, {"fs": McpEntry(command="uvx")})

        assert sorted(p.name for p in paths.config_dir.iterdir()) == ["mcp.json"]
