"""
dslschema error types.

This module exports the error hierarchy raised while building a schema.
"""

from .errors import (
    ConfigurationError,
    DslSchemaError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    RecoveryAction,
    ScopeError,
    SemanticsConflictError,
    ShapeError,
)

__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorContext",
    "DslSchemaError",
    "ScopeError",
    "SemanticsConflictError",
    "ShapeError",
    "ConfigurationError",
]
