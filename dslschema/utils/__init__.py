"""
dslschema utility modules.

This package provides shared utilities used across the dslschema codebase:
- Logging (loguru, STDERR only)
- Serialization of schema values to primitives
"""

# Logger
from .logger import (
    configure_logging,
    get_log_level,
    is_debug_enabled,
    logger,
)

# Serialization
from .serialization import serialize_to_primitives

# Helpers
from .helpers import enum_value, type_display_name

__all__ = [
    # Logger
    "configure_logging",
    "get_log_level",
    "is_debug_enabled",
    "logger",
    # Serialization
    "serialize_to_primitives",
    # Helpers
    "enum_value",
    "type_display_name",
]
