# ABOUTME: Structural validation for canonical MCP entries
# ABOUTME: Collects every finding instead of stopping at the first one
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from manage_mcp.models import REMOTE_TRANSPORTS, McpEntry, McpRegistry


@dataclass(frozen=True)
class ValidationError:
    """A single validation finding.

    ABOUTME: Uses frozen dataclass for immutability
    ABOUTME: path is dotted from the entry name, e.g. "github.env.TOKEN"
    """
    path: str
    reason: str


def _check_string_map(
    name: str, field_name: str, value: Any, value_label: str
) -> list[ValidationError]:
    if not isinstance(value, dict):
        return [ValidationError(f"{name}.{field_name}", f"{field_name} must be an object")]

    return [
        ValidationError(f"{name}.{field_name}.{key}", f"{value_label} must be strings")
        for key, item in value.items()
        if not isinstance(item, str)
    ]


def validate_entry(name: str, entry: McpEntry | Mapping[str, Any]) -> list[ValidationError]:
    """Validate one entry before it is allowed into the registry.

    ABOUTME: Accepts raw parsed mappings as well as McpEntry instances
    ABOUTME: command is optional only for remote (sse/http) transports
    ABOUTME: Returns list of all findings (empty if valid)

    Args:
        name: Entry name, used as the prefix of every finding path
        entry: Entry to check

    Returns:
        List of ValidationError instances

    Examples:
        >>> validate_entry("fs", {"command": "npx", "args": ["-y", "server"]})
        []
        >>> validate_entry("fs", {})
        [ValidationError(path='fs.command', reason='command is required')]
    """
    data = entry.to_dict() if isinstance(entry, McpEntry) else entry
    errors: list[ValidationError] = []

    transport = data.get("transport")
    if transport is None:
        transport = data.get("type")
    is_remote = isinstance(transport, str) and transport in REMOTE_TRANSPORTS

    if "command" not in data:
        if not is_remote:
            errors.append(ValidationError(f"{name}.command", "command is required"))
    elif not isinstance(data["command"], str):
        errors.append(ValidationError(f"{name}.command", "command must be a string"))
    elif data["command"] == "":
        errors.append(ValidationError(f"{name}.command", "command cannot be empty"))

    if "args" in data:
        args = data["args"]
        if not isinstance(args, list):
            errors.append(ValidationError(f"{name}.args", "args must be an array"))
        else:
            for index, arg in enumerate(args):
                if not isinstance(arg, str):
                    errors.append(
                        ValidationError(f"{name}.args[{index}]", "args elements must be strings")
                    )

    if "env" in data:
        errors.extend(_check_string_map(name, "env", data["env"], "env values"))

    if "url" in data:
        url = data["url"]
        if not isinstance(url, str) or url == "":
            errors.append(ValidationError(f"{name}.url", "url must be a non-empty string"))
    elif is_remote:
        errors.append(
            ValidationError(f"{name}.url", f'url is required for transport "{transport}"')
        )

    if "headers" in data:
        errors.extend(_check_string_map(name, "headers", data["headers"], "header values"))

    if "project_path" in data and not isinstance(data["project_path"], str):
        errors.append(ValidationError(f"{name}.project_path", "project_path must be a string"))

    return errors


def validate_registry(registry: McpRegistry | Mapping[str, Any]) -> list[ValidationError]:
    """Validate every entry in a registry, concatenating the findings."""
    errors: list[ValidationError] = []
    for name, entry in registry.items():
        errors.extend(validate_entry(name, entry))
    return errors
