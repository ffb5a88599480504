"""Declaration-site tags for Python host types.

Decorate methods (and classes, for their constructor) to expose them to
the restricted configuration language::

    @restricted
    class Container:
        @restricted
        @adding
        def item(self, name: str, configure: Callable[[Item], None] | None = None) -> Item:
            ...

        @restricted
        @configuring(property_name="settings")
        def configure_settings(self, configure: Callable[[Settings], None]) -> None:
            ...

Tags are collected on the decorated object under constants.TAGS_ATTRIBUTE
and read back by dslschema.introspection.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from dslschema.constants import TAGS_ATTRIBUTE
from dslschema.extraction.descriptors import (
    ROLE_TAG_PRECEDENCE,
    AccessFromCurrentReceiverOnlyTag,
    AddingTag,
    BuilderTag,
    ConfiguringTag,
    HiddenInDslTag,
    RestrictedTag,
    Tag,
)
from dslschema.types.errors import ConfigurationError, ErrorCode, ErrorContext

F = TypeVar("F")


def tags_of(target: Any) -> tuple[Tag, ...]:
    """Tags attached to a function, property or class."""
    if isinstance(target, property):
        target = target.fget
    # Class tags are not inherited: read the class's own namespace.
    if isinstance(target, type):
        return tuple(vars(target).get(TAGS_ATTRIBUTE, ()))
    return tuple(getattr(target, TAGS_ATTRIBUTE, ()))


def _add_tag(target: F, tag: Tag) -> F:
    holder: Any = target.fget if isinstance(target, property) else target
    existing = tags_of(holder)
    if isinstance(tag, ROLE_TAG_PRECEDENCE) and any(
        isinstance(t, ROLE_TAG_PRECEDENCE) for t in existing
    ):
        raise ConfigurationError(
            f"{getattr(holder, '__qualname__', holder)!s} already has a role tag; "
            f"cannot add {type(tag).__name__}",
            code=ErrorCode.INVALID_TAG,
            context=ErrorContext(operation="tag", component="annotations"),
        )
    setattr(holder, TAGS_ATTRIBUTE, (*existing, tag))
    return target


def builder(function: F) -> F:
    """Sets the property named like the function and returns the object."""
    return _add_tag(function, BuilderTag())


def adding(function: F) -> F:
    """Creates and appends a new object, optionally configured by a trailing block."""
    return _add_tag(function, AddingTag())


def configuring(
    function: F | None = None, *, property_name: str = ""
) -> F | Callable[[F], F]:
    """Opens an object for configuration through a single block parameter.

    Usable bare (``@configuring``) or with an explicit backing property
    (``@configuring(property_name="settings")``).
    """

    def decorate(target: F) -> F:
        return _add_tag(target, ConfiguringTag(property_name))

    if function is None:
        return decorate
    return decorate(function)


def access_from_current_receiver_only(function: F) -> F:
    return _add_tag(function, AccessFromCurrentReceiverOnlyTag())


def restricted(target: F) -> F:
    """Opts a member (or, on a class, its constructor) in to the restricted language."""
    return _add_tag(target, RestrictedTag())


def hidden_in_dsl(target: F) -> F:
    return _add_tag(target, HiddenInDslTag())
