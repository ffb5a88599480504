"""Role-tag classification: from a function's tags and shape to its semantics.

A function carries at most one role tag (Builder, Adding, Configuring);
see descriptors.ROLE_TAG_PRECEDENCE for which wins if several are
present. Untagged functions are Pure. Each tag has preconditions on the
function's shape, and every violation is a SemanticsConflictError: a
schema is never built from an inconsistent declaration.
"""

from __future__ import annotations

from typing import Any

from dslschema.extraction.descriptors import (
    AddingTag,
    BuilderTag,
    ConfiguringTag,
    FunctionDescriptor,
)
from dslschema.extraction.host_types import is_subtype, is_unit, normalize, unwrap_optional
from dslschema.extraction.protocols import ConfigureLambdaHandler, SchemaPreIndex
from dslschema.extraction.types import (
    AccessAndConfigure,
    AccessAndConfigureReturnType,
    AddAndConfigure,
    Builder,
    ConfigureAccessor,
    ConfigureBlockRequirement,
    ConfiguringLambdaArgument,
    FunctionSemantics,
    PropertyAccessor,
    Pure,
)
from dslschema.types.errors import ErrorCode, ErrorContext, SemanticsConflictError
from dslschema.utils.helpers import type_display_name
from dslschema.utils.logger import logger


def infer_function_semantics(
    function: FunctionDescriptor,
    in_type: Any | None,
    pre_index: SchemaPreIndex,
    configure_lambdas: ConfigureLambdaHandler,
) -> FunctionSemantics:
    """Classify a function by its role tag.

    Args:
        function: The declared function.
        in_type: The type whose member the function is; None for
            functions without a receiver.
        pre_index: Property index and type resolver for the schema.
        configure_lambdas: Configuration-block detector.

    Returns:
        The function's semantics.

    Raises:
        SemanticsConflictError: The tag contradicts the function's shape.
        ScopeError: A type the semantics refers to is not in the schema.
    """
    match function.role_tag:
        case BuilderTag():
            _require_receiver(function, in_type, "builder")
            semantics: FunctionSemantics = Builder(pre_index.resolve(function.return_type))
        case AddingTag():
            _require_receiver(function, in_type, "adding")
            semantics = _adding_semantics(function, in_type, pre_index, configure_lambdas)
        case ConfiguringTag() as tag:
            _require_receiver(function, in_type, "configuring")
            semantics = _configuring_semantics(
                function, tag, in_type, pre_index, configure_lambdas
            )
        case _:
            semantics = Pure(pre_index.resolve(function.return_type))

    logger.debug("{}.{} classified as {}", type_display_name(in_type), function.name, semantics)
    return semantics


def _adding_semantics(
    function: FunctionDescriptor,
    in_type: Any,
    pre_index: SchemaPreIndex,
    configure_lambdas: ConfigureLambdaHandler,
) -> AddAndConfigure:
    last_param = function.parameters[-1] if function.parameters else None
    last_type = last_param.type if last_param is not None else None

    if (
        is_unit(function.return_type)
        and last_param is not None
        and configure_lambdas.type_configured_by_lambda(last_type) is not None
    ):
        raise _conflict(
            ErrorCode.ADDING_UNIT_WITH_BLOCK,
            "an adding function with a None return type may not accept configuring lambdas",
            function,
            in_type,
        )

    has_configure_lambda = last_param is not None and configure_lambdas.is_configure_lambda_for_type(
        function.return_type, last_type
    )
    if not has_configure_lambda:
        requirement = ConfigureBlockRequirement.NOT_ALLOWED
    elif last_param.is_optional:
        requirement = ConfigureBlockRequirement.OPTIONAL
    else:
        requirement = ConfigureBlockRequirement.REQUIRED

    return AddAndConfigure(pre_index.resolve(function.return_type), requirement)


def _configuring_semantics(
    function: FunctionDescriptor,
    tag: ConfiguringTag,
    in_type: Any,
    pre_index: SchemaPreIndex,
    configure_lambdas: ConfigureLambdaHandler,
) -> AccessAndConfigure:
    explicit_name = tag.property_name
    property_name = explicit_name or function.name

    data_property = pre_index.property_named(in_type, property_name)
    property_type = pre_index.property_type(in_type, property_name)

    if explicit_name and data_property is None:
        raise _conflict(
            ErrorCode.PROPERTY_NOT_FOUND,
            f"a property name '{explicit_name}' is specified for configuring function "
            "but no such property was found",
            function,
            in_type,
        )

    value_params = function.value_parameters
    if len(value_params) != 1:
        raise _conflict(
            ErrorCode.CONFIGURING_PARAMETER_COUNT,
            "a configuring function must accept exactly one parameter, the configuring "
            f"lambda; found {len(value_params)}",
            function,
            in_type,
        )

    configured_type = configure_lambdas.type_configured_by_lambda(value_params[0].type)
    if configured_type is None:
        raise _conflict(
            ErrorCode.CONFIGURING_NOT_A_BLOCK,
            "a configuring function must accept a configuring lambda",
            function,
            in_type,
        )

    if property_type is not None and not is_subtype(configured_type, property_type):
        raise _conflict(
            ErrorCode.PROPERTY_TYPE_MISMATCH,
            f"configure lambda type {type_display_name(configured_type)} is inconsistent "
            f"with property type {type_display_name(property_type)}",
            function,
            in_type,
        )

    return_type = normalize(unwrap_optional(function.return_type))
    if is_unit(return_type):
        return_kind = AccessAndConfigureReturnType.UNIT
    elif (property_type is not None and return_type == property_type) or return_type == normalize(
        configured_type
    ):
        return_kind = AccessAndConfigureReturnType.CONFIGURED_OBJECT
    else:
        raise _conflict(
            ErrorCode.AMBIGUOUS_RETURN_TYPE,
            "cannot infer the return type of a configuring function; "
            "it must be None or the configured object type",
            function,
            in_type,
        )

    accessor: ConfigureAccessor
    if data_property is not None:
        accessor = PropertyAccessor(data_property)
    else:
        accessor = ConfiguringLambdaArgument(pre_index.resolve(configured_type))
    return AccessAndConfigure(accessor, return_kind)


def _require_receiver(function: FunctionDescriptor, in_type: Any | None, role: str) -> None:
    if in_type is None:
        raise _conflict(
            ErrorCode.RECEIVER_REQUIRED,
            f"a {role} function must be a member of a type",
            function,
            in_type,
        )


def _conflict(
    code: ErrorCode,
    message: str,
    function: FunctionDescriptor,
    in_type: Any | None,
) -> SemanticsConflictError:
    type_name = type_display_name(in_type) if in_type is not None else None
    return SemanticsConflictError(
        f"{type_name + '.' if type_name else ''}{function.name}: {message}",
        code=code,
        context=ErrorContext(
            operation="infer_function_semantics",
            type_name=type_name,
            member_name=function.name,
            component="semantics",
        ),
    )
