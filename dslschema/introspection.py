"""Python introspection: describe classes and functions for extraction.

PythonIntrospector implements the MemberIntrospector protocol over
Python classes:

- member functions: plain instance methods, own and inherited, excluding
  dunders, static/class methods and properties
- constructors: ``__init__`` (one per class), tagged by the class and
  by ``__init__`` itself

index_types() performs the pre-indexing phase for a set of classes:
registers them, discovers their properties (annotated attributes and
``property`` objects) and claims ``get_<name>`` / ``set_<name>``
accessor methods of those properties so they are not extracted twice.
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Callable, Iterable, Iterator
from typing import Any, ClassVar, get_origin, get_type_hints

from dslschema.annotations import tags_of
from dslschema.extraction.descriptors import (
    AccessFromCurrentReceiverOnlyTag,
    FunctionDescriptor,
    HiddenInDslTag,
    ParameterDescriptor,
    ParameterKind,
    Visibility,
)
from dslschema.extraction.host_types import UNANNOTATED, is_class, unwrap_optional
from dslschema.extraction.pre_index import PreIndex
from dslschema.extraction.types import PropertyMode
from dslschema.types.errors import ConfigurationError, ErrorCode, ErrorContext, ShapeError
from dslschema.utils.logger import logger

_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def visibility_of(name: str) -> Visibility:
    if name.startswith("__") and not name.endswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_") and not name.endswith("__"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def _type_hints(target: Any) -> dict[str, Any]:
    try:
        return get_type_hints(target)
    except (NameError, TypeError) as e:
        raise ConfigurationError(
            f"cannot evaluate type annotations of {target!r}: {e}",
            code=ErrorCode.INVALID_TARGET,
            context=ErrorContext(operation="introspect", component="introspection"),
            original_error=e,
        ) from e


def describe_function(
    function: Callable[..., Any],
    *,
    name: str | None = None,
    receiver_type: type | None = None,
    return_type: Any = UNANNOTATED,
    tags: tuple = (),
) -> FunctionDescriptor:
    """Describe a Python function.

    Args:
        function: The function object (unbound for methods).
        name: Schema name; defaults to ``function.__name__``.
        receiver_type: When given, the first parameter is the receiver.
        return_type: Overrides the annotated return type.
        tags: Extra tags in addition to those on the function.

    Raises:
        ShapeError: The function takes ``*args`` or ``**kwargs``.
    """
    name = name or function.__name__
    hints = _type_hints(function)
    signature = inspect.signature(function)

    parameters: list[ParameterDescriptor] = []
    for index, param in enumerate(signature.parameters.values()):
        if param.kind in _VARIADIC_KINDS:
            raise ShapeError(
                f"{name}: variadic parameter *{param.name} cannot be expressed in the schema",
                code=ErrorCode.VARIADIC_PARAMETER,
                context=ErrorContext(member_name=name, component="introspection"),
            )
        if receiver_type is not None and index == 0:
            parameters.append(ParameterDescriptor(param.name, receiver_type, ParameterKind.INSTANCE))
            continue
        parameters.append(
            ParameterDescriptor(
                name=param.name,
                type=hints.get(param.name, UNANNOTATED),
                is_optional=param.default is not inspect.Parameter.empty,
            )
        )

    if return_type is UNANNOTATED:
        return_type = hints.get("return", UNANNOTATED)

    return FunctionDescriptor(
        name=name,
        return_type=return_type,
        parameters=tuple(parameters),
        tags=(*tags, *tags_of(function)),
        visibility=visibility_of(name),
        namespace=getattr(function, "__module__", "") or "",
    )


def describe_top_level_function(function: Callable[..., Any]) -> FunctionDescriptor:
    return describe_function(function)


class PythonIntrospector:
    """MemberIntrospector over Python classes."""

    def member_functions(self, host_type: type) -> Iterator[FunctionDescriptor]:
        for name in sorted(dir(host_type)):
            if name.startswith("__") and name.endswith("__"):
                continue
            raw = inspect.getattr_static(host_type, name)
            if not inspect.isfunction(raw):
                continue
            yield describe_function(raw, name=name, receiver_type=host_type)

    def constructors(self, host_type: type) -> Iterator[FunctionDescriptor]:
        init = host_type.__init__
        if init is object.__init__:
            yield FunctionDescriptor(
                name="__init__",
                return_type=host_type,
                tags=tags_of(host_type),
                namespace=host_type.__module__,
            )
            return

        described = describe_function(
            init,
            name="__init__",
            receiver_type=host_type,
            return_type=host_type,
            tags=tags_of(host_type),
        )
        # Constructors have no receiver in the schema; hints of generated
        # __init__ methods (dataclasses) fall back to the class annotations.
        class_hints = _class_hints(host_type)
        parameters = tuple(
            dataclasses.replace(param, type=class_hints.get(param.name, UNANNOTATED))
            if param.type is UNANNOTATED
            else param
            for param in described.value_parameters
        )
        yield dataclasses.replace(described, parameters=parameters)


def _class_hints(host_type: type) -> dict[str, Any]:
    return {
        name: hint
        for name, hint in _type_hints(host_type).items()
        if get_origin(hint) is not ClassVar and hint is not ClassVar
    }


# ============================================================================
# Pre-indexing
# ============================================================================


def index_types(types: Iterable[type], pre_index: PreIndex | None = None) -> PreIndex:
    """Register classes and their properties in a pre-index.

    All classes are registered before any property is indexed, so
    properties may refer to any class of the set.
    """
    pre_index = pre_index or PreIndex()
    types = list(types)
    for host_type in types:
        pre_index.register_type(host_type)
    for host_type in types:
        _index_properties(pre_index, host_type)
    logger.info("Pre-indexed {} types", len(types))
    return pre_index


def _index_properties(pre_index: PreIndex, host_type: type) -> None:
    defaults = _fields_with_defaults(host_type)
    property_names: list[str] = []

    for name, hint in _class_hints(host_type).items():
        if visibility_of(name) is not Visibility.PUBLIC or not _is_indexable(host_type, name, hint):
            continue
        pre_index.add_property(host_type, name, hint, has_default_value=name in defaults)
        property_names.append(name)

    for name in sorted(dir(host_type)):
        raw = inspect.getattr_static(host_type, name)
        if not isinstance(raw, property) or raw.fget is None:
            continue
        hint = _type_hints(raw.fget).get("return", UNANNOTATED)
        if visibility_of(name) is not Visibility.PUBLIC or not _is_indexable(host_type, name, hint):
            continue
        tags = tags_of(raw)
        pre_index.add_property(
            host_type,
            name,
            hint,
            mode=PropertyMode.READ_WRITE if raw.fset is not None else PropertyMode.READ_ONLY,
            is_hidden_in_dsl=any(isinstance(t, HiddenInDslTag) for t in tags),
            is_direct_access_only=any(isinstance(t, AccessFromCurrentReceiverOnlyTag) for t in tags),
        )
        property_names.append(name)

    for name in property_names:
        accessors = [
            accessor
            for accessor in (f"get_{name}", f"set_{name}")
            if inspect.isfunction(inspect.getattr_static(host_type, accessor, None))
        ]
        if accessors:
            pre_index.claim_functions(host_type, *accessors)
            logger.debug("{}: {} claimed by property {}", host_type.__qualname__, accessors, name)


def _is_indexable(host_type: type, name: str, hint: Any) -> bool:
    # Collections, unions and callables have no schema type reference.
    if is_class(unwrap_optional(hint)):
        return True
    logger.debug("{}.{}: {!r} is not a nominal type; not indexed", host_type.__qualname__, name, hint)
    return False


def _fields_with_defaults(host_type: type) -> set[str]:
    if dataclasses.is_dataclass(host_type):
        return {
            f.name
            for f in dataclasses.fields(host_type)
            if f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING
        }
    return {name for name in _class_hints(host_type) if hasattr(host_type, name)}
