# Platform adapter base utilities
import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar

from manage_mcp.models import McpEntry, McpRegistry, SourceData
from manage_mcp.results import ExportError, Result, SourceError
from manage_mcp.utils.files import dump_json, write_text_atomic
from manage_mcp.utils.validation import validate_entry

logger = logging.getLogger(__name__)

# ABOUTME: Characters outside this set become "_" in composite names
_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")

# ABOUTME: Optional entry fields the import guard type-checks
_STRING_LIST_FIELDS = ("args",)
_STRING_MAP_FIELDS = ("env", "headers")
_STRING_FIELDS = ("url", "project_path", "type", "transport")


def sanitize_name(value: str) -> str:
    """Replace every character outside [A-Za-z0-9_-] with "_"."""
    return _UNSAFE_NAME_CHARS.sub("_", value)


def derive_project_name(project_path: str) -> str:
    """Sanitized last path segment of a project path.

    ABOUTME: Falls back to "project" when the last segment is empty

    Examples:
        >>> derive_project_name("/workspace/my.app")
        'my_app'
        >>> derive_project_name("/workspace/app/")
        'project'
    """
    segment = project_path.split("/")[-1]
    return sanitize_name(segment or "project")


def project_entry_name(project_path: str, local_name: str) -> str:
    """Encode a project-scoped entry name: project[<project>].<local>."""
    return f"project[{derive_project_name(project_path)}].{sanitize_name(local_name)}"


def local_entry_name(entry_name: str, project_name: str) -> str:
    """Recover the local name from a composite project-scoped name.

    ABOUTME: Strips "project[<project_name>]." when present
    ABOUTME: Else uses the text after the last "." (if any follows it)
    ABOUTME: Else returns the name unchanged
    """
    marker = f"project[{project_name}]."
    if entry_name.startswith(marker):
        return entry_name[len(marker):]

    separator = entry_name.rfind(".")
    if 0 <= separator < len(entry_name) - 1:
        return entry_name[separator + 1:]

    return entry_name


def is_mcp_entry(value: Any) -> bool:
    """Minimal structural guard applied to entries found in tool configs.

    ABOUTME: Requires a non-empty string command
    ABOUTME: Optional fields, when present, must be well typed
    """
    if not isinstance(value, Mapping):
        return False

    command = value.get("command")
    if not isinstance(command, str) or not command:
        return False

    for key in _STRING_FIELDS:
        if key in value and not isinstance(value[key], str):
            return False

    for key in _STRING_LIST_FIELDS:
        if key in value:
            items = value[key]
            if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
                return False

    for key in _STRING_MAP_FIELDS:
        if key in value:
            mapping = value[key]
            if not isinstance(mapping, Mapping) or not all(
                isinstance(v, str) for v in mapping.values()
            ):
                return False

    return True


def is_importable_entry(name: str, value: Any) -> bool:
    """is_mcp_entry plus the registry's own validation rules.

    ABOUTME: Anything accepted here can be read back by read_registry
    ABOUTME: e.g. type "sse" without a url, or an empty url, is rejected
    """
    if not is_mcp_entry(value):
        return False

    findings = validate_entry(name, value)
    if findings:
        details = "; ".join(f"{err.path}: {err.reason}" for err in findings)
        logger.debug(f"Skipping invalid MCP entry '{name}': {details}")
        return False

    return True


def map_servers_section(section: Any) -> McpRegistry:
    """Convert a tool's servers table into canonical entries.

    ABOUTME: Non-mapping sections yield an empty registry
    ABOUTME: Entries failing is_importable_entry are skipped, not fatal
    """
    registry: McpRegistry = {}
    if not isinstance(section, Mapping):
        return registry

    for name, data in section.items():
        if is_importable_entry(name, data):
            registry[name] = McpEntry.from_dict(data)
        else:
            logger.debug(f"Skipping malformed MCP entry '{name}'")

    return registry


def global_entries(registry: McpRegistry) -> dict[str, dict[str, Any]]:
    """Native dicts for entries without a project_path, keyed by name."""
    return {
        name: entry.to_dict(include_project_path=False)
        for name, entry in registry.items()
        if not entry.project_path
    }


class FileToolAdapter:
    """Shared read/write mechanics for one external tool's config file.

    ABOUTME: Subclasses set tool_name, servers_key, relative_path and format hooks
    ABOUTME: read_source/map_to_registry implement ToolProfile, write implements ToolExporter
    ABOUTME: write only replaces the managed section(s); other keys are kept as-is
    """

    tool_name: ClassVar[str]
    servers_key: ClassVar[str] = "mcpServers"
    relative_path: ClassVar[tuple[str, ...]]
    format_label: ClassVar[str] = "JSON"
    decode_errors: ClassVar[tuple[type[Exception], ...]] = (json.JSONDecodeError,)

    def __init__(self, config_path: Path | None = None, home: Path | None = None) -> None:
        """Initialize adapter with optional custom config path.

        ABOUTME: Defaults to the tool's fixed location under home (Path.home() if omitted)
        """
        if config_path:
            self._config_path = config_path
        else:
            base = home if home is not None else Path.home()
            self._config_path = base.joinpath(*self.relative_path)

    @property
    def name(self) -> str:
        return self.tool_name

    @property
    def config_path(self) -> Path:
        return self._config_path

    # Format hooks

    def parse(self, text: str) -> Any:
        return json.loads(text)

    def serialize(self, document: dict[str, Any]) -> str:
        return dump_json(document)

    # Import

    def map_to_registry(self, data: Any) -> McpRegistry:
        """Pure transform from the parsed native document."""
        if not isinstance(data, Mapping):
            return {}
        return map_servers_section(data.get(self.servers_key))

    def read_source(self) -> Result[SourceData, SourceError]:
        """Load the tool's config and map it to canonical entries.

        ABOUTME: Missing file is SourceMissing (zero entries, not a failure)
        ABOUTME: Undecodable content is ParseFailed, other OS errors are IOError
        """
        path = self._config_path
        try:
            text = path.read_text(encoding="utf-8")
            parsed = self.parse(text)
        except FileNotFoundError as e:
            return Result.fail(SourceError(
                kind="SourceMissing",
                message=f"{self.tool_name} config file not found at {path}",
                cause=e,
            ))
        except (*self.decode_errors, UnicodeDecodeError) as e:
            return Result.fail(SourceError(
                kind="ParseFailed",
                message=f"Invalid {self.format_label} in {path}: {e}",
                cause=e,
            ))
        except OSError as e:
            return Result.fail(SourceError(
                kind="IOError",
                message=f"Failed to read {path}: {e}",
                cause=e,
            ))

        entries = self.map_to_registry(parsed)
        return Result.ok(SourceData(entries=entries, prompt_required=list(entries)))

    # Export

    def load_existing(self) -> Result[dict[str, Any], ExportError]:
        """Read the current target document for a non-destructive write.

        ABOUTME: Missing file is an empty document
        ABOUTME: Malformed content is surfaced as ParseFailed, never discarded
        """
        path = self._config_path
        try:
            text = path.read_text(encoding="utf-8")
            document = self.parse(text)
        except FileNotFoundError:
            return Result.ok({})
        except (*self.decode_errors, UnicodeDecodeError) as e:
            return Result.fail(ExportError(
                kind="ParseFailed",
                message=f"Invalid {self.format_label} in {path}: {e}",
                cause=e,
            ))
        except OSError as e:
            return Result.fail(ExportError(
                kind="IOError",
                message=f"Failed to read {path}: {e}",
                cause=e,
            ))

        if not isinstance(document, dict):
            return Result.fail(ExportError(
                kind="ParseFailed",
                message=f"Expected a top-level object in {path}",
            ))

        return Result.ok(document)

    def apply_registry(self, existing: dict[str, Any], registry: McpRegistry) -> dict[str, Any]:
        """Return existing with its managed section replaced by global entries."""
        updated = dict(existing)
        updated[self.servers_key] = global_entries(registry)
        return updated

    def write(self, registry: McpRegistry) -> Result[None, ExportError]:
        """Project the registry into the tool's config file.

        ABOUTME: Reads existing content first so unrelated keys survive
        ABOUTME: Overwrites the file atomically
        """
        existing_result = self.load_existing()
        if not existing_result.success:
            return Result.fail(existing_result.error)

        updated = self.apply_registry(existing_result.value or {}, registry)

        path = self._config_path
        try:
            write_text_atomic(path, self.serialize(updated))
        except (OSError, TypeError, ValueError) as e:
            return Result.fail(ExportError(
                kind="IOError",
                message=f"Failed to write {path}: {e}",
                cause=e,
            ))

        logger.debug(f"Wrote {self.tool_name} config to {path}")
        return Result.ok()
