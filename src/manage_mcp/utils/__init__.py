# ABOUTME: Utility modules for manage_mcp
# ABOUTME: Exports validation and logging helpers

from manage_mcp.utils.logging_setup import configure_logging
from manage_mcp.utils.validation import ValidationError, validate_entry, validate_registry

__all__ = [
    "ValidationError",
    "validate_entry",
    "validate_registry",
    "configure_logging",
]
