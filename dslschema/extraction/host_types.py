"""Helpers for reasoning about Python host types.

Host types are classes or ``typing`` constructs as returned by
``typing.get_type_hints``. ``None`` and ``NoneType`` both mean Unit.
"""

from __future__ import annotations

import inspect
import types
from typing import Any, Union, get_args, get_origin

NONE_TYPE = type(None)

# Stands in for a missing annotation in descriptors.
UNANNOTATED = inspect.Parameter.empty


def normalize(host_type: Any) -> Any:
    """Map ``None`` to ``NoneType`` so Unit has a single spelling."""
    return NONE_TYPE if host_type is None else host_type


def is_unit(host_type: Any) -> bool:
    return normalize(host_type) is NONE_TYPE


def is_class(host_type: Any) -> bool:
    """Whether the type is a nominal class (not an alias, union or callable)."""
    if host_type is UNANNOTATED or host_type is Any:
        return False
    return isinstance(normalize(host_type), type) and get_origin(host_type) is None


def unwrap_optional(host_type: Any) -> Any:
    """``Optional[X]`` / ``X | None`` -> ``X``; anything else unchanged."""
    if get_origin(host_type) not in (Union, types.UnionType):
        return host_type
    members = [arg for arg in get_args(host_type) if arg is not NONE_TYPE]
    if len(members) == 1 and len(get_args(host_type)) == 2:
        return members[0]
    return host_type


def is_subtype(sub: Any, sup: Any) -> bool:
    """Whether ``sub`` is identical to, or a subclass of, ``sup``."""
    sub, sup = normalize(sub), normalize(sup)
    if sub == sup:
        return True
    if is_class(sub) and is_class(sup):
        return issubclass(sub, sup)
    return False
