# manage_mcp - canonical MCP registry with import/export to tool configs
# ABOUTME: Version information
__version__ = "1.0.0"

# ABOUTME: Export core data models and result types
from manage_mcp.config import ConfigPaths, read_registry, resolve_config_paths, write_registry
from manage_mcp.exporter import export_mcp_config
from manage_mcp.importer import import_mcp_config
from manage_mcp.merge import merge_entries, prompt_overwrite, prompt_yes_no
from manage_mcp.models import (
    ExportOptions,
    ExportSummary,
    ImportOptions,
    ImportSummary,
    McpEntry,
    McpRegistry,
    MergeOutcome,
    OverwriteDecision,
)
from manage_mcp.results import McpOperationError, Result, UnsupportedToolError

# ABOUTME: Export utility functions
from manage_mcp.utils import ValidationError, validate_entry, validate_registry

__all__ = [
    "__version__",
    "ConfigPaths",
    "ExportOptions",
    "ExportSummary",
    "ImportOptions",
    "ImportSummary",
    "McpEntry",
    "McpRegistry",
    "MergeOutcome",
    "OverwriteDecision",
    "Result",
    "McpOperationError",
    "UnsupportedToolError",
    "ValidationError",
    "export_mcp_config",
    "import_mcp_config",
    "merge_entries",
    "prompt_overwrite",
    "prompt_yes_no",
    "read_registry",
    "resolve_config_paths",
    "validate_entry",
    "validate_registry",
    "write_registry",
]
