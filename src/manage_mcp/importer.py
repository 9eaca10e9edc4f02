# Import orchestration: external tool config -> canonical registry
import logging
from pathlib import Path

from manage_mcp.config import read_registry, resolve_config_paths, write_registry
from manage_mcp.merge import PromptFn, merge_entries, prompt_overwrite, prompt_yes_no
from manage_mcp.models import ImportOptions, ImportSummary, OverwriteDecision, ToolProfile
from manage_mcp.platforms import resolve_platform
from manage_mcp.results import McpOperationError
from manage_mcp.utils.backup import ensure_backup

logger = logging.getLogger(__name__)


def resolve_profile(tool: str, home: Path | None = None) -> ToolProfile:
    """Return the import side of the adapter for `tool`.

    Raises:
        UnsupportedToolError: If the tool has no adapter
    """
    return resolve_platform(tool, home)


def import_mcp_config(
    tool: str,
    options: ImportOptions,
    prompt_fn: PromptFn = prompt_yes_no,
) -> ImportSummary:
    """Import a tool's MCP entries into the canonical registry.

    ABOUTME: Missing source file is a zero-entry success
    ABOUTME: Conflicts are discovered with a provisional merge, then resolved
    ABOUTME: once for the whole batch (force accepts all)
    ABOUTME: Registry is backed up before it is rewritten

    Args:
        tool: Tool name, e.g. "ClaudeCode"
        options: force flag plus explicit env/home
        prompt_fn: Collaborator deciding overwrites when not forced

    Returns:
        ImportSummary with added count and names kept at their existing value

    Raises:
        UnsupportedToolError: If the tool has no adapter
        McpOperationError: If reading the source or the registry, the backup
            or the registry write fails
    """
    logger.info(f"Extracting MCP configuration from {tool}")

    profile = resolve_profile(tool, options.home)

    source_result = profile.read_source()
    if not source_result.success:
        error = source_result.error
        if error.kind == "SourceMissing":
            logger.info(f"No MCP entries found for {tool} (source file not found)")
            return ImportSummary(tool=tool, added_count=0, skipped_entries=[])
        logger.error(f"Failed to read source: {error.message}")
        raise McpOperationError(error.message)

    incoming = source_result.value.entries
    logger.debug(f"Found {len(incoming)} MCP entries in source")

    paths = resolve_config_paths(options.env, options.home)
    registry_result = read_registry(paths)
    if not registry_result.success:
        logger.error(f"Failed to read registry: {registry_result.error.message}")
        raise McpOperationError(registry_result.error.message)

    load = registry_result.value
    if load.source == "initialized":
        logger.info(f"Initialized new MCP registry at {paths.config_file}")

    provisional = merge_entries(load.registry, incoming, {})
    decisions: OverwriteDecision = {}
    if provisional.conflicts:
        decisions = prompt_overwrite(provisional.conflicts, options.force, prompt_fn)

    final = merge_entries(load.registry, incoming, decisions)
    skipped = [name for name in provisional.conflicts if not decisions.get(name)]

    for name in skipped:
        logger.warning(f"Skipped overwriting existing entry: {name}")

    backup_result = ensure_backup(paths)
    if not backup_result.success:
        logger.error(f"Failed to create backup: {backup_result.error.message}")
        raise McpOperationError(backup_result.error.message)

    write_result = write_registry(paths, final.merged)
    if not write_result.success:
        logger.error(f"Failed to write registry: {write_result.error.message}")
        raise McpOperationError(write_result.error.message)

    added_count = len(incoming) - len(skipped)
    logger.info(f"Successfully added {added_count} MCP entries from {tool}")

    for name, entry in incoming.items():
        if name not in skipped:
            target = entry.command if entry.command else entry.url
            logger.debug(f"Added: {name} ({target})")

    return ImportSummary(tool=tool, added_count=added_count, skipped_entries=skipped)
