# Export orchestration: canonical registry -> external tool configs
import logging
from collections.abc import Sequence
from pathlib import Path

from manage_mcp.config import read_registry, resolve_config_paths
from manage_mcp.models import ExportOptions, ExportSummary, ToolExporter
from manage_mcp.platforms import resolve_platform
from manage_mcp.results import McpOperationError

logger = logging.getLogger(__name__)


def resolve_exporter(tool: str, home: Path | None = None) -> ToolExporter:
    """Return the export side of the adapter for `tool`.

    Raises:
        UnsupportedToolError: If the tool has no adapter
    """
    return resolve_platform(tool, home)


def export_mcp_config(tools: Sequence[str], options: ExportOptions) -> ExportSummary:
    """Write the registry into each requested tool's config.

    ABOUTME: All tool names are resolved before anything is written
    ABOUTME: Registry is read once and shared by every writer
    ABOUTME: Fail-fast: the first writer failure aborts the remaining tools

    Args:
        tools: Tool names in the order they should be written
        options: Explicit env/home

    Returns:
        ExportSummary listing updated tools in request order

    Raises:
        UnsupportedToolError: If any tool has no adapter
        McpOperationError: If the registry can't be read or a writer fails
    """
    logger.info(f"Exporting MCP entries to tools: {', '.join(tools)}")

    exporters = [resolve_exporter(tool, options.home) for tool in tools]

    paths = resolve_config_paths(options.env, options.home)
    registry_result = read_registry(paths)
    if not registry_result.success:
        logger.error(f"Failed to read registry: {registry_result.error.message}")
        raise McpOperationError(registry_result.error.message)

    registry = registry_result.value.registry
    updated_tools: list[str] = []

    for tool, exporter in zip(tools, exporters):
        write_result = exporter.write(registry)
        if not write_result.success:
            logger.error(write_result.error.message)
            raise McpOperationError(write_result.error.message)

        logger.debug(f"Updated {tool}")
        updated_tools.append(tool)

    logger.info(f"Exported MCP entries to {len(updated_tools)} tool(s).")
    return ExportSummary(updated_tools=updated_tools)
