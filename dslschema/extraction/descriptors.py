"""Descriptors of host declarations fed into function extraction.

The classifier never touches host reflection directly. An introspector
(see ``dslschema.introspection`` for the Python one) describes each
declared function or constructor as a FunctionDescriptor, and the tags
attached at the declaration site as tag values.

Host types inside descriptors are opaque to this module: they are
whatever the introspector, the configure-lambda handler and the type
resolver agree on (Python classes and ``typing`` constructs for the
bundled implementations).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeVar, Union


class ParameterKind(StrEnum):
    """Role of a parameter in the host signature."""

    INSTANCE = "instance"  # the receiver (``self``)
    VALUE = "value"


class Visibility(StrEnum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


# ============================================================================
# Tags
# ============================================================================


@dataclass(frozen=True)
class BuilderTag:
    """Marks a function that sets one property and returns the built object."""


@dataclass(frozen=True)
class AddingTag:
    """Marks a function that creates and appends a new child object."""


@dataclass(frozen=True)
class ConfiguringTag:
    """Marks a function that opens an object for configuration.

    ``property_name`` names the backing property explicitly; empty means
    the function's own name is tried.
    """

    property_name: str = ""


@dataclass(frozen=True)
class AccessFromCurrentReceiverOnlyTag:
    """The member may only be used on the innermost receiver."""


@dataclass(frozen=True)
class RestrictedTag:
    """The member is opted in to the restricted configuration language."""


@dataclass(frozen=True)
class HiddenInDslTag:
    """The member is known to the schema but hidden from scripts."""


RoleTag = Union[BuilderTag, AddingTag, ConfiguringTag]
Tag = Union[
    BuilderTag,
    AddingTag,
    ConfiguringTag,
    AccessFromCurrentReceiverOnlyTag,
    RestrictedTag,
    HiddenInDslTag,
]

# When more than one role tag is present, the first one here wins.
ROLE_TAG_PRECEDENCE: tuple[type, ...] = (BuilderTag, AddingTag, ConfiguringTag)

T = TypeVar("T")


# ============================================================================
# Declarations
# ============================================================================


@dataclass(frozen=True)
class ParameterDescriptor:
    """A formal parameter of a host function."""

    name: str | None
    type: Any
    kind: ParameterKind = ParameterKind.VALUE
    is_optional: bool = False


@dataclass(frozen=True)
class FunctionDescriptor:
    """A declared member function, constructor or top-level function.

    ``parameters`` is the full formal list in declaration order, receiver
    included when there is one. ``namespace`` is the declaring module for
    top-level functions.
    """

    name: str
    return_type: Any
    parameters: tuple[ParameterDescriptor, ...] = ()
    tags: tuple[Tag, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    namespace: str = ""

    @property
    def instance_parameter(self) -> ParameterDescriptor | None:
        for param in self.parameters:
            if param.kind is ParameterKind.INSTANCE:
                return param
        return None

    @property
    def receiver_type(self) -> Any | None:
        instance = self.instance_parameter
        return instance.type if instance is not None else None

    @property
    def value_parameters(self) -> tuple[ParameterDescriptor, ...]:
        return tuple(p for p in self.parameters if p.kind is not ParameterKind.INSTANCE)

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC

    @property
    def role_tag(self) -> RoleTag | None:
        """The effective role tag, by precedence; None for plain functions."""
        for tag_type in ROLE_TAG_PRECEDENCE:
            found = self.tag(tag_type)
            if found is not None:
                return found
        return None

    def tag(self, tag_type: type[T]) -> T | None:
        for tag in self.tags:
            if isinstance(tag, tag_type):
                return tag
        return None

    def has_tag(self, tag_type: type) -> bool:
        return self.tag(tag_type) is not None
