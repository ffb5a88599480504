"""Converters from schema entries to printable forms.

This module provides:

1. **to_primitives** — JSON-ready dicts of extracted schema functions,
   used by the CLI ``--format json`` output.
2. **format_*** — one-line signatures for ``--format text`` output.
"""

from __future__ import annotations

from typing import Any

from dslschema.extraction.orchestrator import SchemaFunctions
from dslschema.extraction.types import (
    AccessAndConfigure,
    AddAndConfigure,
    Builder,
    ConfiguringLambdaArgument,
    DataConstructor,
    DataParameter,
    DataTopLevelFunction,
    FunctionSemantics,
    PropertyAccessor,
    Pure,
    SchemaMemberFunction,
    StoreValueInProperty,
)
from dslschema.utils.helpers import enum_value
from dslschema.utils.serialization import serialize_to_primitives


def to_primitives(functions: SchemaFunctions) -> dict[str, Any]:
    """Schema functions as JSON-serializable primitives, keyed by type name."""
    return {
        "types": {
            entry.data_type.fq_name: {
                "member_functions": serialize_to_primitives(entry.member_functions),
                "constructors": serialize_to_primitives(entry.constructors),
            }
            for entry in functions.types
        },
        "top_level_functions": serialize_to_primitives(functions.top_level_functions),
    }


def format_semantics(semantics: FunctionSemantics) -> str:
    match semantics:
        case Pure(return_value_type=ret):
            return f"pure -> {ret}"
        case Builder(return_value_type=ret):
            return f"builder -> {ret}"
        case AddAndConfigure(object_type=obj, configure_block_requirement=block):
            return f"adds {obj} (block {enum_value(block)})"
        case AccessAndConfigure(accessor=PropertyAccessor(data_property=prop), return_type=ret):
            return f"configures property {prop.name}: {prop.value_type} (returns {enum_value(ret)})"
        case AccessAndConfigure(accessor=ConfiguringLambdaArgument(type_ref=ref), return_type=ret):
            return f"configures new {ref} (returns {enum_value(ret)})"
    raise TypeError(f"unknown function semantics: {semantics!r}")


def format_parameter(parameter: DataParameter) -> str:
    text = f"{parameter.name}: {parameter.type}"
    if parameter.is_default:
        text += " = ..."
    if isinstance(parameter.semantics, StoreValueInProperty):
        text += f" [-> {parameter.semantics.data_property.name}]"
    return text


def _format_parameters(parameters: tuple[DataParameter, ...]) -> str:
    return ", ".join(format_parameter(p) for p in parameters)


def format_member_function(function: SchemaMemberFunction) -> str:
    direct = " (direct access only)" if function.is_direct_access_only else ""
    return (
        f"{function.receiver}.{function.name}({_format_parameters(function.parameters)})"
        f": {format_semantics(function.semantics)}{direct}"
    )


def format_constructor(constructor: DataConstructor) -> str:
    return f"{constructor.data_class}({_format_parameters(constructor.parameters)})"


def format_top_level_function(function: DataTopLevelFunction) -> str:
    prefix = f"{function.package_name}." if function.package_name else ""
    return (
        f"{prefix}{function.name}({_format_parameters(function.parameters)})"
        f": {format_semantics(function.semantics)}"
    )
