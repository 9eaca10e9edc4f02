# CLI interface for manage-mcp
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from manage_mcp import __version__
from manage_mcp.config import read_registry, resolve_config_paths, write_registry
from manage_mcp.entry_builder import AddCommandInput, AddCommandOptions, build_entry_from_cli
from manage_mcp.exporter import export_mcp_config
from manage_mcp.importer import import_mcp_config
from manage_mcp.models import ExportOptions, ImportOptions, McpEntry
from manage_mcp.platforms import TOOL_NAMES
from manage_mcp.registry import add_entry, remove_entry, sort_entries
from manage_mcp.results import McpOperationError, UnsupportedToolError
from manage_mcp.utils import ValidationError, configure_logging, validate_entry
from manage_mcp.utils.backup import ensure_backup

logger = logging.getLogger("manage_mcp.cli")

# ABOUTME: Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def format_entry_display(name: str, entry: McpEntry) -> str:
    """Multi-line, human-readable rendering of one entry."""
    parts = [f"{name}:"]
    if entry.command:
        parts.append(f"  command: {entry.command}")
    if entry.args:
        parts.append(f"  args: [{', '.join(json.dumps(arg) for arg in entry.args)}]")
    if entry.type:
        parts.append(f"  type: {entry.type}")
    if entry.url:
        parts.append(f"  url: {entry.url}")
    if entry.project_path:
        parts.append(f"  project_path: {entry.project_path}")
    if entry.env:
        parts.append("  env:")
        parts.extend(f"    {key}: {value}" for key, value in entry.env.items())
    if entry.headers:
        parts.append("  headers:")
        parts.extend(f"    {key}: {value}" for key, value in entry.headers.items())
    return "\n".join(parts)


def format_validation_errors(errors: list[ValidationError]) -> str:
    lines = [f"Validation failed with {len(errors)} error(s):"]
    lines.extend(f"  {error.path}: {error.reason}" for error in errors)
    return "\n".join(lines)


def cmd_list(args: argparse.Namespace) -> int:
    """Execute list command.

    ABOUTME: Prints every registry entry sorted by name
    """
    logger.info("Listing MCP entries")

    paths = resolve_config_paths(os.environ, Path.home())
    result = read_registry(paths)
    if not result.success:
        logger.error(f"Failed to read registry: {result.error.message}")
        return EXIT_FAILURE

    if result.value.source == "initialized":
        logger.info(f"Initialized new MCP registry at {paths.config_file}")

    entries = sort_entries(result.value.registry)
    if not entries:
        logger.info("No MCP entries found")
        return EXIT_SUCCESS

    for name, entry in entries:
        print(format_entry_display(name, entry))
        print()

    logger.info(f"Total entries: {len(entries)}")
    return EXIT_SUCCESS


def _entry_from_args(args: argparse.Namespace) -> McpEntry | None:
    """Build the entry for `add` from --config or from flags.

    ABOUTME: Logs the reason and returns None on bad input
    """
    if args.config:
        config_file = Path(args.config)
        try:
            raw = json.loads(config_file.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.error(f"Config file not found: {config_file}")
            return None
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            return None
        except OSError as e:
            logger.error(f"Failed to read {config_file}: {e}")
            return None

        if not isinstance(raw, dict):
            logger.error(f"Expected a JSON object in {config_file}")
            return None

        errors = validate_entry(args.name, raw)
        if errors:
            logger.error(format_validation_errors(errors))
            return None
        return McpEntry.from_dict(raw)

    built = build_entry_from_cli(AddCommandInput(
        name=args.name,
        target=args.target,
        command_arguments=args.command_args,
        options=AddCommandOptions(
            transport=args.transport,
            env=args.env,
            headers=args.header,
            project_path=args.project_path,
            url=args.url,
            command=args.command,
        ),
    ))
    if not built.success:
        logger.error(built.error.message)
        return None

    errors = validate_entry(args.name, built.value)
    if errors:
        logger.error(format_validation_errors(errors))
        return None
    return built.value


def cmd_add(args: argparse.Namespace) -> int:
    """Execute add command.

    ABOUTME: Validates the new entry, backs up, then rewrites the registry
    ABOUTME: An existing entry with the same name is replaced (with a warning)
    """
    name = args.name
    logger.info(f"Adding MCP entry: {name}")

    entry = _entry_from_args(args)
    if entry is None:
        return EXIT_FAILURE

    paths = resolve_config_paths(os.environ, Path.home())
    result = read_registry(paths)
    if not result.success:
        logger.error(f"Failed to read registry: {result.error.message}")
        return EXIT_FAILURE

    registry = result.value.registry
    if result.value.source == "initialized":
        logger.info(f"Initialized new MCP registry at {paths.config_file}")
    if name in registry:
        logger.warning(f"MCP entry '{name}' already exists and will be overwritten.")

    backup = ensure_backup(paths)
    if not backup.success:
        logger.error(f"Failed to create backup: {backup.error.message}")
        return EXIT_FAILURE

    written = write_registry(paths, add_entry(registry, name, entry))
    if not written.success:
        logger.error(f"Failed to write registry: {written.error.message}")
        return EXIT_FAILURE

    logger.info(f"Successfully added MCP entry: {name}")
    print(format_entry_display(name, entry))
    return EXIT_SUCCESS


def cmd_remove(args: argparse.Namespace) -> int:
    """Execute remove command.

    ABOUTME: Missing names are a warning, not a failure
    """
    name = args.name
    logger.info(f"Removing MCP entry: {name}")

    paths = resolve_config_paths(os.environ, Path.home())
    result = read_registry(paths)
    if not result.success:
        logger.error(f"Failed to read registry: {result.error.message}")
        return EXIT_FAILURE

    registry = result.value.registry
    if name not in registry:
        logger.warning(f"MCP entry '{name}' not found")
        return EXIT_SUCCESS

    backup = ensure_backup(paths)
    if not backup.success:
        logger.error(f"Failed to create backup: {backup.error.message}")
        return EXIT_FAILURE

    written = write_registry(paths, remove_entry(registry, name))
    if not written.success:
        logger.error(f"Failed to write registry: {written.error.message}")
        return EXIT_FAILURE

    logger.info(f"Successfully removed MCP entry: {name}")
    return EXIT_SUCCESS


def cmd_import(args: argparse.Namespace) -> int:
    """Execute import command."""
    options = ImportOptions(force=args.force, env=os.environ, home=Path.home())

    try:
        summary = import_mcp_config(args.tool, options)
    except (UnsupportedToolError, McpOperationError) as e:
        logger.error(str(e))
        return EXIT_FAILURE

    if summary.added_count == 0:
        logger.info(f"No new entries were added from {args.tool}")
    else:
        logger.info(f"Successfully imported {summary.added_count} entries from {args.tool}")

    if summary.skipped_entries:
        logger.warning(
            f"Skipped {len(summary.skipped_entries)} existing entries: "
            f"{', '.join(summary.skipped_entries)}"
        )
    return EXIT_SUCCESS


def cmd_export(args: argparse.Namespace) -> int:
    """Execute export command.

    ABOUTME: Fail-fast across tools, see export_mcp_config
    """
    if not args.tools:
        logger.warning("No tools specified. Nothing to export.")
        return EXIT_SUCCESS

    options = ExportOptions(env=os.environ, home=Path.home())

    try:
        summary = export_mcp_config(args.tools, options)
    except (UnsupportedToolError, McpOperationError) as e:
        logger.error(str(e))
        return EXIT_FAILURE

    if summary.updated_tools:
        logger.info(f"Exported MCP configuration to: {', '.join(summary.updated_tools)}")
    else:
        logger.info("No tools were updated.")
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    tools_help = ", ".join(TOOL_NAMES)

    parser = argparse.ArgumentParser(
        prog="manage-mcp",
        description="CLI tool for managing MCP (Model Context Protocol) configurations",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"manage-mcp v{__version__}",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    subparsers.add_parser("list", help="List all MCP entries")

    add_parser = subparsers.add_parser(
        "add",
        help="Add a new MCP entry",
        description="Add an entry from a JSON file (--config) or from flags. "
                    "Flags go before <name>; everything after the target is passed to the command.",
    )
    add_parser.add_argument("name", help="Name of the MCP entry")
    add_parser.add_argument("target", nargs="?", help="Command (stdio) or URL (sse/http)")
    add_parser.add_argument(
        "command_args", nargs=argparse.REMAINDER, help="Arguments passed to the command"
    )
    add_parser.add_argument("--config", help="Path to a JSON file holding the entry")
    add_parser.add_argument("--transport", help="stdio (default), sse or http")
    add_parser.add_argument("--url", help="Server URL for sse/http transports")
    add_parser.add_argument("--command", help="Command to run; target becomes the first argument")
    add_parser.add_argument(
        "--env", action="append", default=[], help="KEY=VALUE environment variable (repeatable)"
    )
    add_parser.add_argument(
        "--header", action="append", default=[], help="KEY=VALUE HTTP header (repeatable)"
    )
    add_parser.add_argument("--project-path", help="Scope the entry to a project directory")

    remove_parser = subparsers.add_parser("remove", help="Remove an MCP entry")
    remove_parser.add_argument("name", help="Name of the MCP entry to remove")

    import_parser = subparsers.add_parser(
        "import", help="Import MCP entries from external tool configurations"
    )
    import_parser.add_argument("tool", help=f"Tool name ({tools_help})")
    import_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing entries without confirmation",
    )

    export_parser = subparsers.add_parser(
        "export", help="Export MCP entries into external tool configurations"
    )
    export_parser.add_argument("tools", nargs="*", help=f"Tool names ({tools_help})")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args, configures logging and dispatches to a command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    commands = {
        "list": cmd_list,
        "add": cmd_add,
        "remove": cmd_remove,
        "import": cmd_import,
        "export": cmd_export,
    }
    handler = commands.get(args.subcommand)
    if handler is None:
        parser.print_help()
        return EXIT_SUCCESS

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
