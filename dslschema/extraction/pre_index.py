"""In-memory pre-index: the type registry and property index for one schema.

Populated by a build phase that runs before extraction:

1. register every type that belongs to the schema,
2. add the properties of each type (their types must already resolve),
3. claim the functions that those properties already represent.

During extraction the pre-index is only read, so one instance can be
shared by any number of extractors.
"""

from __future__ import annotations

from typing import Any

from dslschema.constants import BUILTIN_TYPE_NAMES
from dslschema.extraction.host_types import UNANNOTATED, is_class, normalize, unwrap_optional
from dslschema.extraction.types import DataProperty, DataTypeRef, PropertyMode
from dslschema.types.errors import ErrorCode, ErrorContext, ScopeError, ShapeError
from dslschema.utils.helpers import type_display_name


class PreIndex:
    """Registry of schema types and their properties.

    Implements both the PropertyIndex and TypeRefResolver protocols.
    """

    def __init__(self) -> None:
        self._types: dict[type, DataTypeRef] = {}
        self._properties: dict[type, dict[str, tuple[DataProperty, Any]]] = {}
        self._claimed: dict[type, set[str]] = {}

    # ================================================================
    # Population
    # ================================================================

    def register_type(self, host_type: type, fq_name: str | None = None) -> DataTypeRef:
        """Add a type to the schema; returns its reference."""
        if not is_class(host_type):
            raise ShapeError(
                f"only classes can be registered in a schema, got {host_type!r}",
                code=ErrorCode.NOT_A_CLASS,
                context=ErrorContext(operation="register_type", component="pre_index"),
            )
        ref = DataTypeRef(fq_name or type_display_name(host_type))
        self._types[host_type] = ref
        self._properties.setdefault(host_type, {})
        self._claimed.setdefault(host_type, set())
        return ref

    def add_property(
        self,
        host_type: type,
        name: str,
        property_type: Any,
        mode: PropertyMode = PropertyMode.READ_WRITE,
        has_default_value: bool = False,
        is_hidden_in_dsl: bool = False,
        is_direct_access_only: bool = False,
    ) -> DataProperty:
        """Record a property of a registered type."""
        self._require_registered(host_type, "add_property")
        data_property = DataProperty(
            name=name,
            value_type=self.resolve(property_type),
            mode=mode,
            has_default_value=has_default_value,
            is_hidden_in_dsl=is_hidden_in_dsl,
            is_direct_access_only=is_direct_access_only,
        )
        self._properties[host_type][name] = (
            data_property,
            normalize(unwrap_optional(property_type)),
        )
        return data_property

    def claim_functions(self, host_type: type, *function_names: str) -> None:
        """Mark functions as already represented by a property."""
        self._require_registered(host_type, "claim_functions")
        self._claimed[host_type].update(function_names)

    # ================================================================
    # PropertyIndex
    # ================================================================

    def properties_of(self, host_type: Any) -> list[DataProperty]:
        return [prop for prop, _ in self._properties.get(host_type, {}).values()]

    def property_named(self, host_type: Any, name: str) -> DataProperty | None:
        entry = self._properties.get(host_type, {}).get(name)
        return entry[0] if entry is not None else None

    def property_type(self, host_type: Any, name: str) -> Any | None:
        entry = self._properties.get(host_type, {}).get(name)
        return entry[1] if entry is not None else None

    def functions_claimed_by(self, host_type: Any) -> set[str]:
        return set(self._claimed.get(host_type, ()))

    # ================================================================
    # TypeRefResolver
    # ================================================================

    @property
    def types(self) -> list[type]:
        """Registered types in registration order."""
        return list(self._types)

    def has_type(self, host_type: Any) -> bool:
        return host_type in self._types

    def is_in_scope(self, host_type: Any) -> bool:
        host_type = normalize(unwrap_optional(host_type))
        return host_type in BUILTIN_TYPE_NAMES or host_type in self._types

    def resolve(self, host_type: Any) -> DataTypeRef:
        # Nullability is not part of the reference: X | None resolves as X.
        host_type = normalize(unwrap_optional(host_type))
        if host_type is UNANNOTATED:
            raise ShapeError(
                "a type annotation is missing on a member used in the schema",
                code=ErrorCode.MISSING_ANNOTATION,
                context=ErrorContext(operation="resolve", component="pre_index"),
            )
        if not is_class(host_type):
            raise ShapeError(
                f"type {host_type!r} classified as a non-class is used in the schema",
                code=ErrorCode.UNCLASSIFIABLE_TYPE,
                context=ErrorContext(operation="resolve", component="pre_index"),
            )
        builtin_name = BUILTIN_TYPE_NAMES.get(host_type)
        if builtin_name is not None:
            return DataTypeRef(builtin_name)
        ref = self._types.get(host_type)
        if ref is None:
            raise ScopeError(
                f"type {type_display_name(host_type)} is used in the schema "
                "but is not registered in it",
                context=ErrorContext(
                    operation="resolve",
                    type_name=type_display_name(host_type),
                    component="pre_index",
                ),
            )
        return ref

    def _require_registered(self, host_type: Any, operation: str) -> None:
        if host_type not in self._types:
            raise ScopeError(
                f"type {type_display_name(host_type)} has not been registered",
                code=ErrorCode.TYPE_NOT_INDEXED,
                context=ErrorContext(
                    operation=operation,
                    type_name=type_display_name(host_type),
                    component="pre_index",
                ),
            )
