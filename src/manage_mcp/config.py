# Registry location and persistence for manage_mcp
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from manage_mcp.models import McpEntry, McpRegistry, RegistryLoad
from manage_mcp.results import RegistryError, Result
from manage_mcp.utils.files import read_json_document, write_json_file
from manage_mcp.utils.validation import validate_entry

logger = logging.getLogger(__name__)

# ABOUTME: Environment variable overriding the registry directory
CONFIG_DIR_ENV = "MCP_CONFIG_DIR"

# ABOUTME: Default registry directory name under the home directory
DEFAULT_CONFIG_DIRNAME = ".manage_mcp"

CONFIG_FILENAME = "mcp.json"
BACKUP_SUFFIX = ".bak"

# ABOUTME: Top-level key of the registry document
SERVERS_KEY = "mcpServers"


@dataclass(frozen=True)
class ConfigPaths:
    """Resolved locations of the registry and its backup."""
    config_dir: Path
    config_file: Path
    backup_file: Path


def resolve_config_paths(env: Mapping[str, str], home: Path | None = None) -> ConfigPaths:
    """Return the registry paths for the given environment.

    ABOUTME: $MCP_CONFIG_DIR/mcp.json, default <home>/.manage_mcp/mcp.json
    ABOUTME: Backup sits alongside as mcp.json.bak

    Args:
        env: Environment mapping (usually os.environ at the CLI boundary)
        home: Home directory, defaults to Path.home()

    Returns:
        ConfigPaths for the registry
    """
    override = env.get(CONFIG_DIR_ENV)
    if override:
        config_dir = Path(override)
    else:
        config_dir = (home if home is not None else Path.home()) / DEFAULT_CONFIG_DIRNAME

    config_file = config_dir / CONFIG_FILENAME
    return ConfigPaths(
        config_dir=config_dir,
        config_file=config_file,
        backup_file=config_file.with_name(CONFIG_FILENAME + BACKUP_SUFFIX),
    )


def read_registry(paths: ConfigPaths) -> Result[RegistryLoad, RegistryError]:
    """Load the registry from disk.

    ABOUTME: Missing file yields an empty registry marked "initialized"
    ABOUTME: Documents without mcpServers are treated as empty
    ABOUTME: Malformed entries fail the whole load (InvalidFormat)

    Args:
        paths: Resolved registry paths

    Returns:
        Result with RegistryLoad, or a RegistryError tagged by kind
    """
    config_file = paths.config_file

    try:
        data = read_json_document(config_file)
    except FileNotFoundError:
        return Result.ok(RegistryLoad(registry={}, source="initialized"))
    except PermissionError as e:
        return Result.fail(RegistryError(
            kind="PermissionDenied",
            message=f"Permission denied reading {config_file}",
            cause=e,
        ))
    except json.JSONDecodeError as e:
        return Result.fail(RegistryError(
            kind="InvalidJSON",
            message=f"Invalid JSON in {config_file}: {e}",
            cause=e,
        ))
    except (OSError, UnicodeDecodeError) as e:
        return Result.fail(RegistryError(
            kind="Unknown",
            message=f"Failed to read {config_file}: {e}",
            cause=e,
        ))

    if not isinstance(data, dict):
        return Result.fail(RegistryError(
            kind="InvalidFormat",
            message=f"Expected a JSON object at the top level of {config_file}",
        ))

    servers = data.get(SERVERS_KEY, {})
    if not isinstance(servers, dict):
        return Result.fail(RegistryError(
            kind="InvalidFormat",
            message=f"'{SERVERS_KEY}' in {config_file} must be an object",
        ))

    registry: McpRegistry = {}
    for name, entry_data in servers.items():
        if not isinstance(entry_data, dict):
            return Result.fail(RegistryError(
                kind="InvalidFormat",
                message=f"Entry '{name}' in {config_file} must be an object",
            ))

        findings = validate_entry(name, entry_data)
        if findings:
            details = "; ".join(f"{err.path}: {err.reason}" for err in findings)
            return Result.fail(RegistryError(
                kind="InvalidFormat",
                message=f"Invalid entry in {config_file}: {details}",
            ))

        registry[name] = McpEntry.from_dict(entry_data)

    return Result.ok(RegistryLoad(registry=registry, source="existing"))


def write_registry(paths: ConfigPaths, registry: McpRegistry) -> Result[None, RegistryError]:
    """Persist the whole registry.

    ABOUTME: Creates the config directory if needed
    ABOUTME: Atomic replace, never a partial write

    Args:
        paths: Resolved registry paths
        registry: Complete registry to write

    Returns:
        Result with no value, or a RegistryError
    """
    document = {
        SERVERS_KEY: {name: entry.to_dict() for name, entry in registry.items()}
    }

    try:
        write_json_file(paths.config_file, document)
    except PermissionError as e:
        return Result.fail(RegistryError(
            kind="PermissionDenied",
            message=f"Permission denied writing {paths.config_file}",
            cause=e,
        ))
    except OSError as e:
        return Result.fail(RegistryError(
            kind="Unknown",
            message=f"Failed to write {paths.config_file}: {e}",
            cause=e,
        ))

    logger.debug(f"Wrote {len(registry)} entries to {paths.config_file}")
    return Result.ok()
