"""Protocols at the boundary of function extraction.

Collaborators consumed by the extractor:

- PropertyIndex: properties known per type and the functions they claim
- ConfigureLambdaHandler: recognizes configuration-block parameters
- TypeRefResolver: maps host types to schema type references
- MemberIntrospector: enumerates a type's declared members
- MemberFilter: decides whether a member is considered at all

And the interface it exposes:

- FunctionExtractor: member functions, constructors and top-level
  functions of the schema

The PropertyIndex and TypeRefResolver are populated before extraction
starts and only read during it.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from dslschema.extraction.descriptors import FunctionDescriptor
from dslschema.extraction.types import (
    DataConstructor,
    DataProperty,
    DataTopLevelFunction,
    DataTypeRef,
    SchemaMemberFunction,
)


@runtime_checkable
class PropertyIndex(Protocol):
    """Read-only view of the properties discovered for each type."""

    def properties_of(self, host_type: Any) -> Iterable[DataProperty]:
        """All properties of the type."""
        ...

    def property_named(self, host_type: Any, name: str) -> DataProperty | None:
        """The property with this name, if any."""
        ...

    def property_type(self, host_type: Any, name: str) -> Any | None:
        """The declared host type of the named property, if any."""
        ...

    def functions_claimed_by(self, host_type: Any) -> set[str]:
        """Names of functions already represented as property accessors."""
        ...


@runtime_checkable
class ConfigureLambdaHandler(Protocol):
    """Recognizes configuration-block shaped parameter types."""

    def is_configure_lambda_for_type(self, configured_type: Any, maybe_lambda_type: Any) -> bool:
        """Whether the parameter type is a block that configures ``configured_type``."""
        ...

    def type_configured_by_lambda(self, maybe_lambda_type: Any) -> Any | None:
        """The type a block parameter configures, or None if not a block."""
        ...


@runtime_checkable
class TypeRefResolver(Protocol):
    """Maps host types to references into the schema under construction."""

    def is_in_scope(self, host_type: Any) -> bool:
        ...

    def resolve(self, host_type: Any) -> DataTypeRef:
        """Resolve a type; raises ScopeError when it is not registered."""
        ...


class SchemaPreIndex(PropertyIndex, TypeRefResolver, Protocol):
    """The pre-index handed to extractors: property index plus resolver."""


@runtime_checkable
class MemberIntrospector(Protocol):
    """Enumerates declared members of a host type as descriptors."""

    def member_functions(self, host_type: Any) -> Iterable[FunctionDescriptor]:
        ...

    def constructors(self, host_type: Any) -> Iterable[FunctionDescriptor]:
        ...


@runtime_checkable
class MemberFilter(Protocol):
    """Pluggable inclusion policy for declared members."""

    def should_include_member(self, member: FunctionDescriptor) -> bool:
        ...


@runtime_checkable
class FunctionExtractor(Protocol):
    """Produces the function part of a schema for a type.

    Extractors are combined with ``+`` (see orchestrator.compose):
    member functions and constructors are unioned, top-level functions
    come from the first extractor that yields one.
    """

    def member_functions(
        self, host_type: Any, pre_index: SchemaPreIndex
    ) -> Iterable[SchemaMemberFunction]:
        ...

    def constructors(
        self, host_type: Any, pre_index: SchemaPreIndex
    ) -> Iterable[DataConstructor]:
        ...

    def top_level_function(
        self, function: FunctionDescriptor, pre_index: SchemaPreIndex
    ) -> DataTopLevelFunction | None:
        ...
