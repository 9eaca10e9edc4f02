# Core data models for manage_mcp
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Protocol, runtime_checkable

from manage_mcp.results import ExportError, Result, SourceError

# ABOUTME: Transports that address a server by URL instead of a command
REMOTE_TRANSPORTS = frozenset({"sse", "http"})

# ABOUTME: Keys mapped onto McpEntry fields, everything else lands in extras
ENTRY_FIELDS = (
    "command",
    "args",
    "type",
    "transport",
    "url",
    "env",
    "headers",
    "project_path",
)


@dataclass(frozen=True)
class McpEntry:
    """Canonical, tool-agnostic MCP server entry.

    ABOUTME: Unset fields are None so a round trip never adds keys
    ABOUTME: Unknown source keys are carried in extras untouched
    ABOUTME: project_path marks a project-scoped entry; absent means global
    """
    command: str | None = None
    args: list[str] | None = None
    type: str | None = None
    transport: str | None = None
    url: str | None = None
    env: dict[str, str] | None = None
    headers: dict[str, str] | None = None
    project_path: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def effective_transport(self) -> str:
        """Transport tag, falling back to `type`, then to stdio.

        ABOUTME: Only an unset (None) tag falls through, "" is kept
        """
        if self.transport is not None:
            return self.transport
        if self.type is not None:
            return self.type
        return "stdio"

    @property
    def is_remote(self) -> bool:
        return self.effective_transport in REMOTE_TRANSPORTS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "McpEntry":
        """Build an entry from a parsed JSON/TOML mapping.

        ABOUTME: Copies nested containers so callers can't alias source documents
        """
        args = data.get("args")
        env = data.get("env")
        headers = data.get("headers")
        return cls(
            command=data.get("command"),
            args=list(args) if args is not None else None,
            type=data.get("type"),
            transport=data.get("transport"),
            url=data.get("url"),
            env=dict(env) if env is not None else None,
            headers=dict(headers) if headers is not None else None,
            project_path=data.get("project_path"),
            extras={k: v for k, v in data.items() if k not in ENTRY_FIELDS},
        )

    def to_dict(self, include_project_path: bool = True) -> dict[str, Any]:
        """Convert to a plain dict for serialization.

        ABOUTME: Omits fields that are None
        ABOUTME: include_project_path=False strips the internal scope marker
        """
        result: dict[str, Any] = {}
        for key in ENTRY_FIELDS:
            if key == "project_path" and not include_project_path:
                continue
            value = getattr(self, key)
            if value is None:
                continue
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            result[key] = value
        result.update(self.extras)
        return result

    def without_project_path(self) -> "McpEntry":
        return McpEntry.from_dict(self.to_dict(include_project_path=False))


# ABOUTME: Registry maps unique, case-sensitive names to entries
McpRegistry = dict[str, McpEntry]

# ABOUTME: Per conflicting name: True takes the incoming entry, False keeps existing
OverwriteDecision = dict[str, bool]


@dataclass(frozen=True)
class MergeOutcome:
    """Result of merging incoming entries into a base registry."""
    merged: McpRegistry
    conflicts: list[str]


@dataclass(frozen=True)
class RegistryLoad:
    """Registry contents plus whether they came from disk."""
    registry: McpRegistry
    source: Literal["existing", "initialized"]


@dataclass(frozen=True)
class SourceData:
    """Entries read from an external tool for import."""
    entries: McpRegistry
    prompt_required: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ImportSummary:
    tool: str
    added_count: int
    skipped_entries: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExportSummary:
    updated_tools: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ImportOptions:
    """Inputs for an import run.

    ABOUTME: env and home are explicit so paths never come from ambient state
    """
    force: bool = False
    env: Mapping[str, str] = field(default_factory=dict)
    home: Path | None = None


@dataclass(frozen=True)
class ExportOptions:
    env: Mapping[str, str] = field(default_factory=dict)
    home: Path | None = None


@runtime_checkable
class ToolProfile(Protocol):
    """Import side of a format adapter.

    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    @property
    def name(self) -> str:
        """Tool name as accepted on the command line."""
        ...

    def read_source(self) -> Result[SourceData, SourceError]:
        """Read the tool's native config into canonical entries."""
        ...

    def map_to_registry(self, data: Any) -> McpRegistry:
        """Pure transform from the parsed native document."""
        ...


@runtime_checkable
class ToolExporter(Protocol):
    """Export side of a format adapter."""

    @property
    def name(self) -> str:
        ...

    def write(self, registry: McpRegistry) -> Result[None, ExportError]:
        """Project the registry into the tool's native config."""
        ...
