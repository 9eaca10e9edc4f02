# Claude Code platform adapter
import logging
from collections.abc import Mapping
from typing import Any

from manage_mcp.models import McpEntry, McpRegistry
from manage_mcp.platforms.base import (
    FileToolAdapter,
    derive_project_name,
    global_entries,
    is_importable_entry,
    local_entry_name,
    map_servers_section,
    project_entry_name,
)

logger = logging.getLogger(__name__)

# ABOUTME: Key holding per-project settings, keyed by absolute project path
PROJECTS_KEY = "projects"


class ClaudeCodeAdapter(FileToolAdapter):
    """Adapter for Claude Code (~/.claude.json).

    ABOUTME: The only project-aware tool: global mcpServers plus
    ABOUTME: projects.<path>.mcpServers for per-project entries
    ABOUTME: Project entries become "project[<project>].<local>" with project_path set
    """

    tool_name = "ClaudeCode"
    relative_path = (".claude.json",)

    def map_to_registry(self, data: Any) -> McpRegistry:
        """Collect global and per-project entries.

        ABOUTME: Project and local name segments are sanitized independently
        """
        if not isinstance(data, Mapping):
            return {}

        registry = map_servers_section(data.get(self.servers_key))

        projects = data.get(PROJECTS_KEY)
        if not isinstance(projects, Mapping):
            return registry

        for project_path, project_data in projects.items():
            if not isinstance(project_data, Mapping):
                continue
            servers = project_data.get(self.servers_key)
            if not isinstance(servers, Mapping):
                continue

            for local_name, entry_data in servers.items():
                name = project_entry_name(project_path, local_name)
                if not is_importable_entry(name, entry_data):
                    logger.debug(f"Skipping malformed MCP entry '{local_name}' in {project_path}")
                    continue
                registry[name] = McpEntry.from_dict({**entry_data, "project_path": project_path})

        return registry

    def apply_registry(self, existing: dict[str, Any], registry: McpRegistry) -> dict[str, Any]:
        """Write global entries plus one mcpServers table per project path.

        ABOUTME: Project entries lose project_path and get their local names back
        ABOUTME: Existing project objects keep their other keys
        ABOUTME: Projects not in the registry are left untouched
        """
        project_groups: dict[str, dict[str, dict[str, Any]]] = {}
        for entry_name, entry in registry.items():
            if not entry.project_path:
                continue
            project_name = derive_project_name(entry.project_path)
            local_name = local_entry_name(entry_name, project_name)
            group = project_groups.setdefault(entry.project_path, {})
            group[local_name] = entry.to_dict(include_project_path=False)

        updated = dict(existing)
        updated[self.servers_key] = global_entries(registry)

        if project_groups:
            current_projects = existing.get(PROJECTS_KEY)
            projects = dict(current_projects) if isinstance(current_projects, Mapping) else {}

            for project_path, servers in project_groups.items():
                current = projects.get(project_path)
                if not isinstance(current, Mapping):
                    current = {"name": derive_project_name(project_path)}
                projects[project_path] = {**current, self.servers_key: servers}

            updated[PROJECTS_KEY] = projects

        return updated
