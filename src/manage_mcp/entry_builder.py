# Build canonical entries from `manage-mcp add` flags
from collections.abc import Sequence
from dataclasses import dataclass, field

from manage_mcp.models import REMOTE_TRANSPORTS, McpEntry
from manage_mcp.results import Result

# ABOUTME: Accepted KEY/VALUE separators for --env and --header
KEY_VALUE_SEPARATORS = ("=", ":")


@dataclass(frozen=True)
class AddCommandOptions:
    transport: str | None = None
    env: Sequence[str] = field(default_factory=list)
    headers: Sequence[str] = field(default_factory=list)
    project_path: str | None = None
    url: str | None = None
    command: str | None = None


@dataclass(frozen=True)
class AddCommandInput:
    """Positional and flag values of one add invocation.

    ABOUTME: target is the first positional after the name (command or URL)
    """
    name: str
    target: str | None = None
    command_arguments: Sequence[str] = field(default_factory=list)
    options: AddCommandOptions = field(default_factory=AddCommandOptions)


@dataclass(frozen=True)
class AddCommandError:
    message: str


def split_key_value(value: str, label: str) -> Result[tuple[str, str], AddCommandError]:
    """Split "KEY=VALUE" or "KEY:VALUE" at the earliest separator.

    Examples:
        >>> split_key_value("Authorization: Bearer x", "header").value
        ('Authorization', 'Bearer x')
    """
    positions = [value.find(sep) for sep in KEY_VALUE_SEPARATORS if sep in value]
    if not positions:
        return Result.fail(AddCommandError(f"{label} must be in KEY=VALUE format"))

    index = min(positions)
    key = value[:index].strip()
    raw = value[index + 1:].strip()

    if not key:
        return Result.fail(AddCommandError(f"{label} key must not be empty"))

    return Result.ok((key, raw))


def _to_record(values: Sequence[str], label: str) -> Result[dict[str, str], AddCommandError]:
    record: dict[str, str] = {}
    for value in values:
        parsed = split_key_value(value, label)
        if not parsed.success:
            return Result.fail(parsed.error)
        key, raw = parsed.value
        record[key] = raw
    return Result.ok(record)


def build_entry_from_cli(data: AddCommandInput) -> Result[McpEntry, AddCommandError]:
    """Turn add-command input into a canonical entry.

    ABOUTME: Transport defaults to stdio and is lower-cased
    ABOUTME: Remote transports need --url or the target; they get type, transport, url
    ABOUTME: stdio needs --command or the target; with --command the target becomes args[0]

    Args:
        data: Parsed add-command input

    Returns:
        Result with the McpEntry, or an AddCommandError describing bad input
    """
    options = data.options
    transport = (options.transport or "stdio").lower()

    env_result = _to_record(options.env, "env")
    if not env_result.success:
        return Result.fail(env_result.error)

    headers_result = _to_record(options.headers, "header")
    if not headers_result.success:
        return Result.fail(headers_result.error)

    env = env_result.value or None
    headers = headers_result.value or None

    if transport != "stdio":
        url = options.url or data.target
        if not url:
            return Result.fail(AddCommandError(f'url is required for transport "{transport}"'))
        if transport not in REMOTE_TRANSPORTS:
            return Result.fail(AddCommandError(
                f'Unsupported transport "{transport}". Use stdio, sse or http.'
            ))
        return Result.ok(McpEntry(
            type=transport,
            transport=transport,
            url=url,
            headers=headers,
            env=env,
        ))

    command = options.command or data.target
    if not command:
        return Result.fail(AddCommandError("command is required when transport is stdio"))

    if options.command is not None:
        args = ([data.target] if data.target else []) + list(data.command_arguments)
    else:
        args = list(data.command_arguments)

    return Result.ok(McpEntry(
        command=command,
        args=args or None,
        env=env,
        project_path=options.project_path or None,
    ))
