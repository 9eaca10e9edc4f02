# ABOUTME: Logging configuration for the manage-mcp command line
# ABOUTME: Library modules only call logging.getLogger(__name__); handlers live here
import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(message)s"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stream handler to the package logger.

    ABOUTME: DEBUG level with --verbose, INFO otherwise
    ABOUTME: Replaces previously installed handlers so repeated calls don't duplicate output

    Args:
        verbose: Enable debug output

    Returns:
        The configured "manage_mcp" logger
    """
    logger = logging.getLogger("manage_mcp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
