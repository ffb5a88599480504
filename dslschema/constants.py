"""Shared constants for dslschema.

Centralizes the names used to attach role tags to host functions, the
builtin types that are always in schema scope, and logging defaults.
"""

# Attribute set on decorated functions/classes to hold their DSL tags.
# Read by introspection; never set anywhere else.
TAGS_ATTRIBUTE: str = "__dsl_tags__"

# Builtin host types that every schema knows about without registration.
# Maps the Python type to the fully-qualified name used in DataTypeRef.
BUILTIN_TYPE_NAMES: dict[type, str] = {
    type(None): "None",
    int: "int",
    str: "str",
    bool: "bool",
    float: "float",
}

# Environment variables read by utils.logger
ENV_DEBUG: str = "DSLSCHEMA_DEBUG"
ENV_LOG_LEVEL: str = "DSLSCHEMA_LOG_LEVEL"

DEFAULT_LOG_LEVEL: str = "WARNING"
