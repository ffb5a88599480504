"""Parameter classification: value parameters and their property bindings.

Splits a function's formal parameters into the regular value parameters
that appear in the schema and, at most, one trailing configuration block
that does not. Each value parameter is then bound to a property of the
object the function produces when its name says so.
"""

from __future__ import annotations

from typing import Any

from dslschema.extraction.descriptors import (
    FunctionDescriptor,
    ParameterDescriptor,
    ParameterKind,
)
from dslschema.extraction.protocols import ConfigureLambdaHandler, SchemaPreIndex
from dslschema.extraction.types import (
    NEW_OBJECT_SEMANTICS,
    AccessAndConfigure,
    AddAndConfigure,
    Builder,
    DataParameter,
    FunctionSemantics,
    ParameterSemantics,
    StoreValueInProperty,
    UnknownParameterSemantics,
)


def member_function_parameters(
    function: FunctionDescriptor,
    semantics: FunctionSemantics,
    return_class: Any,
    pre_index: SchemaPreIndex,
    configure_lambdas: ConfigureLambdaHandler,
) -> tuple[DataParameter, ...]:
    """Value parameters of a member function or constructor.

    The receiver is dropped. The last parameter is dropped too when it is
    the block the semantics was classified with (there is not necessarily
    one: an adding function may take no block).
    """
    last_index = len(function.parameters) - 1

    return tuple(
        data_parameter(function, param, return_class, semantics, pre_index)
        for index, param in enumerate(function.parameters)
        if param.kind is not ParameterKind.INSTANCE
        and not (
            index == last_index
            and _is_block_for(param, function, semantics, configure_lambdas)
        )
    )


def top_level_function_parameters(
    function: FunctionDescriptor,
    semantics: FunctionSemantics,
    return_class: Any,
    pre_index: SchemaPreIndex,
    configure_lambdas: ConfigureLambdaHandler,
) -> tuple[DataParameter, ...]:
    """Value parameters of a top-level function.

    The only type a top-level block can configure is the return type, so
    the last parameter is dropped iff it is a block for that type.
    """
    last_index = len(function.parameters) - 1
    return tuple(
        data_parameter(function, param, return_class, semantics, pre_index)
        for index, param in enumerate(function.parameters)
        if index != last_index
        or not configure_lambdas.is_configure_lambda_for_type(function.return_type, param.type)
    )


def data_parameter(
    function: FunctionDescriptor,
    param: ParameterDescriptor,
    return_class: Any,
    semantics: FunctionSemantics,
    pre_index: SchemaPreIndex,
) -> DataParameter:
    param_type = pre_index.resolve(param.type)
    param_semantics = parameter_semantics(semantics, function, param, return_class, pre_index)
    return DataParameter(param.name, param_type, param.is_optional, param_semantics)


def parameter_semantics(
    semantics: FunctionSemantics,
    function: FunctionDescriptor,
    param: ParameterDescriptor,
    return_class: Any,
    pre_index: SchemaPreIndex,
) -> ParameterSemantics:
    """Bind a parameter to a property of the produced object, if one matches.

    Candidates, in order: the function name (builders), then the
    parameter name (builders and adding functions).
    """
    property_names: list[str] = []
    if isinstance(semantics, Builder):
        property_names.append(function.name)
    if isinstance(semantics, NEW_OBJECT_SEMANTICS) and param.name:
        property_names.append(param.name)

    for property_name in property_names:
        data_property = pre_index.property_named(return_class, property_name)
        if data_property is not None:
            return StoreValueInProperty(data_property)
    return UnknownParameterSemantics()


def _is_block_for(
    param: ParameterDescriptor,
    function: FunctionDescriptor,
    semantics: FunctionSemantics,
    configure_lambdas: ConfigureLambdaHandler,
) -> bool:
    # Mirrors the block checks of infer_function_semantics.
    match semantics:
        case AddAndConfigure():
            return semantics.configure_block_requirement.allows and (
                configure_lambdas.is_configure_lambda_for_type(function.return_type, param.type)
            )
        case AccessAndConfigure():
            return configure_lambdas.type_configured_by_lambda(param.type) is not None
        case _:
            return False
