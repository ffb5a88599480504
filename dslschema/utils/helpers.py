"""Small, dependency-free helper functions used across the codebase."""

from __future__ import annotations


def enum_value(x: object) -> str:
    """Extract .value from enum-like objects, or str() for plain values."""
    return x.value if hasattr(x, "value") else str(x)


def type_display_name(host_type: object) -> str:
    """Readable name for a host type in log and error messages."""
    qualname = getattr(host_type, "__qualname__", None)
    if qualname is None:
        return repr(host_type)
    module = getattr(host_type, "__module__", "")
    if module in ("", "builtins"):
        return qualname
    return f"{module}.{qualname}"
