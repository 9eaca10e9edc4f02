# ABOUTME: Backup utility for the canonical registry file.
# ABOUTME: Keeps a single sibling copy (mcp.json.bak) refreshed before each destructive write.
import logging
import shutil

from manage_mcp.config import ConfigPaths
from manage_mcp.results import RegistryError, Result

logger = logging.getLogger(__name__)


def ensure_backup(paths: ConfigPaths) -> Result[None, RegistryError]:
    """Copy the registry file to its backup path.

    ABOUTME: Overwrites any previous backup
    ABOUTME: Uses shutil.copy2() to preserve file metadata
    ABOUTME: A missing registry file means nothing to back up (success)

    Args:
        paths: Resolved registry paths

    Returns:
        Result with no value, or a RegistryError if the copy failed
    """
    if not paths.config_file.exists():
        logger.debug(f"No registry at {paths.config_file}, skipping backup")
        return Result.ok()

    try:
        shutil.copy2(paths.config_file, paths.backup_file)
    except PermissionError as e:
        return Result.fail(RegistryError(
            kind="PermissionDenied",
            message=f"Permission denied creating backup {paths.backup_file}",
            cause=e,
        ))
    except OSError as e:
        return Result.fail(RegistryError(
            kind="Unknown",
            message=f"Failed to create backup: {e}",
            cause=e,
        ))

    logger.debug(f"Backed up {paths.config_file} to {paths.backup_file}")
    return Result.ok()
