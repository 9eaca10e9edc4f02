# Merge engine and conflict resolution for imports
from collections.abc import Callable, Sequence

from manage_mcp.models import McpEntry, McpRegistry, MergeOutcome, OverwriteDecision

# ABOUTME: Collaborator deciding overwrites for a whole batch of conflicting names
PromptFn = Callable[[Sequence[str]], OverwriteDecision]


def merge_entries(
    base: McpRegistry,
    additions: McpRegistry,
    decisions: OverwriteDecision,
) -> MergeOutcome:
    """Merge incoming entries into a base registry.

    ABOUTME: Names absent from base are always inserted
    ABOUTME: Colliding names are recorded; decisions[name] is True takes the addition
    ABOUTME: No recency or scoring, decisions are the only source of truth
    ABOUTME: Returns new dict (doesn't mutate inputs)

    Args:
        base: Existing registry
        additions: Incoming entries
        decisions: Overwrite decision per conflicting name

    Returns:
        MergeOutcome with merged registry and conflicts in additions order

    Examples:
        >>> base = {"a": McpEntry(command="old")}
        >>> outcome = merge_entries(base, {"a": McpEntry(command="new")}, {"a": True})
        >>> outcome.merged["a"].command, outcome.conflicts
        ('new', ['a'])
    """
    merged: dict[str, McpEntry] = dict(base)
    conflicts: list[str] = []

    for name, entry in additions.items():
        if name in base:
            conflicts.append(name)
            if decisions.get(name) is True:
                merged[name] = entry
        else:
            merged[name] = entry

    return MergeOutcome(merged=merged, conflicts=conflicts)


def prompt_overwrite(
    names: Sequence[str],
    force: bool,
    prompt_fn: PromptFn,
) -> OverwriteDecision:
    """Decide which conflicting names get overwritten.

    ABOUTME: force accepts every name without consulting prompt_fn
    ABOUTME: Otherwise the whole batch goes to prompt_fn in one call
    """
    if force:
        return {name: True for name in names}

    return prompt_fn(names)


def prompt_yes_no(names: Sequence[str]) -> OverwriteDecision:
    """Ask once on the terminal and apply the answer to every name.

    ABOUTME: Default all-or-nothing collaborator for prompt_overwrite
    ABOUTME: Only "y" or "yes" (case-insensitive) accepts
    """
    if not names:
        return {}

    message = (
        "The following entries already exist and may be overwritten: "
        f"{', '.join(names)}\nContinue? (y/N): "
    )
    answer = input(message).strip().lower()
    accepted = answer in ("y", "yes")

    return {name: accepted for name in names}
