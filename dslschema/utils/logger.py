"""
Logging utility for dslschema.

Extraction is a library concern, so nothing is emitted unless the host
application (or the CLI) calls configure_logging(). All output goes to
STDERR, leaving STDOUT for schema dumps.

Environment:
- DSLSCHEMA_DEBUG=true: log at DEBUG (per-member classification decisions)
- DSLSCHEMA_LOG_LEVEL=<level>: explicit level, wins over DSLSCHEMA_DEBUG
"""

import os
import sys

from loguru import logger as loguru_logger

from dslschema.constants import DEFAULT_LOG_LEVEL, ENV_DEBUG, ENV_LOG_LEVEL

_LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)

# Library default: silent until configured.
loguru_logger.disable("dslschema")


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get(ENV_DEBUG, "").lower() == "true"


def get_log_level() -> str:
    """Resolve the effective log level from the environment."""
    explicit = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    if explicit:
        return explicit
    return "DEBUG" if is_debug_enabled() else DEFAULT_LOG_LEVEL


def configure_logging(level: str | None = None) -> None:
    """
    Route dslschema logs to STDERR at the given level.

    Args:
        level: Loguru level name; defaults to get_log_level()
    """
    loguru_logger.remove()
    loguru_logger.add(
        sys.stderr,
        level=level or get_log_level(),
        format=_LOG_FORMAT,
        colorize=None,
    )
    loguru_logger.enable("dslschema")


# Export loguru logger for direct use
logger = loguru_logger
