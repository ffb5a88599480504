"""Schema value types produced by function extraction.

These types are the single source of truth for what the restricted
configuration language may call. They are frozen dataclasses: built once
per extraction pass, never mutated, compared structurally. Structural
equality is what lets a composite extractor union the results of its
members without duplicates.

Sum types (function semantics, configure accessors, parameter semantics,
schema member functions) are closed sets of dataclass variants joined in
a ``Union`` alias, so consumers dispatch with ``match``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Union


# ============================================================================
# Type references and properties
# ============================================================================


@dataclass(frozen=True)
class DataTypeRef:
    """Reference to a type registered in the schema, by qualified name."""

    fq_name: str

    UNIT: ClassVar[DataTypeRef]

    @property
    def is_unit(self) -> bool:
        return self == DataTypeRef.UNIT

    def __str__(self) -> str:
        return self.fq_name


DataTypeRef.UNIT = DataTypeRef("None")


class PropertyMode(StrEnum):
    """How a property may be accessed from the configuration language."""

    READ_WRITE = "read_write"
    READ_ONLY = "read_only"
    WRITE_ONLY = "write_only"


@dataclass(frozen=True)
class DataProperty:
    """A stored, named attribute of a type, as known to the property index."""

    name: str
    value_type: DataTypeRef
    mode: PropertyMode = PropertyMode.READ_WRITE
    has_default_value: bool = False
    is_hidden_in_dsl: bool = False
    is_direct_access_only: bool = False


# ============================================================================
# Function semantics
# ============================================================================


class ConfigureBlockRequirement(StrEnum):
    """Whether a trailing configuration block may or must be passed."""

    NOT_ALLOWED = "not_allowed"
    OPTIONAL = "optional"
    REQUIRED = "required"

    @property
    def allows(self) -> bool:
        return self is not ConfigureBlockRequirement.NOT_ALLOWED

    @property
    def requires(self) -> bool:
        return self is ConfigureBlockRequirement.REQUIRED


class AccessAndConfigureReturnType(StrEnum):
    """What a configuring function hands back to the caller."""

    UNIT = "unit"
    CONFIGURED_OBJECT = "configured_object"


@dataclass(frozen=True)
class PropertyAccessor:
    """The configured object is reached through a stored property."""

    data_property: DataProperty

    @property
    def object_type(self) -> DataTypeRef:
        return self.data_property.value_type


@dataclass(frozen=True)
class ConfiguringLambdaArgument:
    """The configured object is created by the call itself; no backing property."""

    type_ref: DataTypeRef

    @property
    def object_type(self) -> DataTypeRef:
        return self.type_ref


ConfigureAccessor = Union[PropertyAccessor, ConfiguringLambdaArgument]


@dataclass(frozen=True)
class Pure:
    """A plain computation with no effect on the configured object graph."""

    return_value_type: DataTypeRef


@dataclass(frozen=True)
class Builder:
    """Sets one property from its single argument and returns the receiver."""

    return_value_type: DataTypeRef


@dataclass(frozen=True)
class AddAndConfigure:
    """Creates and appends a new object, optionally configured by a block."""

    object_type: DataTypeRef
    configure_block_requirement: ConfigureBlockRequirement

    @property
    def return_value_type(self) -> DataTypeRef:
        return self.object_type

    @property
    def configured_type(self) -> DataTypeRef:
        return self.object_type


@dataclass(frozen=True)
class AccessAndConfigure:
    """Opens an existing (or lambda-created) object for configuration."""

    accessor: ConfigureAccessor
    return_type: AccessAndConfigureReturnType

    @property
    def configured_type(self) -> DataTypeRef:
        return self.accessor.object_type

    @property
    def configure_block_requirement(self) -> ConfigureBlockRequirement:
        return ConfigureBlockRequirement.REQUIRED

    @property
    def return_value_type(self) -> DataTypeRef:
        if self.return_type is AccessAndConfigureReturnType.UNIT:
            return DataTypeRef.UNIT
        return self.accessor.object_type


FunctionSemantics = Union[Pure, Builder, AddAndConfigure, AccessAndConfigure]

# Semantics that bring a new object into existence; their parameters may
# initialize properties of that object.
NEW_OBJECT_SEMANTICS = (Builder, AddAndConfigure)


# ============================================================================
# Parameters
# ============================================================================


@dataclass(frozen=True)
class StoreValueInProperty:
    """The argument is stored in the named property of the target object."""

    data_property: DataProperty


@dataclass(frozen=True)
class UnknownParameterSemantics:
    """No property binding could be established for the argument."""


ParameterSemantics = Union[StoreValueInProperty, UnknownParameterSemantics]


@dataclass(frozen=True)
class DataParameter:
    """A regular value parameter of a schema function."""

    name: str | None
    type: DataTypeRef
    is_default: bool
    semantics: ParameterSemantics


# ============================================================================
# Schema functions
# ============================================================================


@dataclass(frozen=True)
class DataBuilderFunction:
    """A ``Builder`` member function: exactly one value parameter."""

    receiver: DataTypeRef
    name: str
    is_direct_access_only: bool
    data_parameter: DataParameter

    @property
    def parameters(self) -> tuple[DataParameter, ...]:
        return (self.data_parameter,)

    @property
    def semantics(self) -> Builder:
        return Builder(self.receiver)


@dataclass(frozen=True)
class DataMemberFunction:
    """Any non-builder member function exposed to the configuration language."""

    receiver: DataTypeRef
    name: str
    parameters: tuple[DataParameter, ...]
    is_direct_access_only: bool
    semantics: FunctionSemantics


SchemaMemberFunction = Union[DataBuilderFunction, DataMemberFunction]


@dataclass(frozen=True)
class DataConstructor:
    """A constructor of a schema type; always ``Pure``."""

    parameters: tuple[DataParameter, ...]
    data_class: DataTypeRef

    @property
    def semantics(self) -> Pure:
        return Pure(self.data_class)


@dataclass(frozen=True)
class DataTopLevelFunction:
    """A module-level function; never has a receiver."""

    package_name: str
    name: str
    parameters: tuple[DataParameter, ...]
    semantics: Pure
