"""Function extractors and the orchestrator that drives them over a schema.

DefaultFunctionExtractor turns the declared members of one type into
schema entries: filter -> classify -> parameterize. Extractors compose
with ``+``; the composite keeps a flat, ordered list of extractors and
merges their results:

- Member functions and constructors: union of all extractors,
  duplicates removed (entries compare structurally)
- Top-level functions: the first extractor that yields one wins

ExtractionOrchestrator runs an extractor over every type of a schema
whose pre-index has already been populated.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from dslschema.extraction.descriptors import AccessFromCurrentReceiverOnlyTag, FunctionDescriptor
from dslschema.extraction.filters import is_public_and_restricted
from dslschema.extraction.host_types import is_class, normalize, unwrap_optional
from dslschema.extraction.lambdas import default_configure_lambdas
from dslschema.extraction.parameters import (
    member_function_parameters,
    top_level_function_parameters,
)
from dslschema.extraction.semantics import infer_function_semantics
from dslschema.extraction.types import (
    Builder,
    DataBuilderFunction,
    DataConstructor,
    DataMemberFunction,
    DataTopLevelFunction,
    DataTypeRef,
    Pure,
    SchemaMemberFunction,
)
from dslschema.types.errors import ErrorCode, ErrorContext, SemanticsConflictError, ShapeError
from dslschema.utils.logger import logger

if TYPE_CHECKING:
    from dslschema.extraction.protocols import (
        ConfigureLambdaHandler,
        FunctionExtractor,
        MemberFilter,
        MemberIntrospector,
        SchemaPreIndex,
    )


class ComposableExtractor:
    """Adds ``+`` composition to an extractor."""

    def __add__(self, other: FunctionExtractor) -> CompositeFunctionExtractor:
        return compose(self, other)


def compose(*extractors: FunctionExtractor) -> CompositeFunctionExtractor:
    """Combine extractors into one flat composite, preserving order.

    Composites among the arguments are expanded rather than nested, so
    ``(a + b) + c`` and ``a + (b + c)`` have the same extractor list.
    """
    flat: list[FunctionExtractor] = []
    for extractor in extractors:
        if isinstance(extractor, CompositeFunctionExtractor):
            flat.extend(extractor.extractors)
        else:
            flat.append(extractor)
    return CompositeFunctionExtractor(flat)


class CompositeFunctionExtractor(ComposableExtractor):
    """Merges the results of several extractors, in priority order."""

    def __init__(self, extractors: Iterable[FunctionExtractor]) -> None:
        self._extractors = tuple(extractors)

    @property
    def extractors(self) -> tuple[FunctionExtractor, ...]:
        return self._extractors

    def member_functions(
        self, host_type: Any, pre_index: SchemaPreIndex
    ) -> list[SchemaMemberFunction]:
        # dict keeps first-seen order while dropping structural duplicates
        merged: dict[SchemaMemberFunction, None] = {}
        for extractor in self._extractors:
            merged.update(dict.fromkeys(extractor.member_functions(host_type, pre_index)))
        return list(merged)

    def constructors(self, host_type: Any, pre_index: SchemaPreIndex) -> list[DataConstructor]:
        merged: dict[DataConstructor, None] = {}
        for extractor in self._extractors:
            merged.update(dict.fromkeys(extractor.constructors(host_type, pre_index)))
        return list(merged)

    def top_level_function(
        self, function: FunctionDescriptor, pre_index: SchemaPreIndex
    ) -> DataTopLevelFunction | None:
        for extractor in self._extractors:
            result = extractor.top_level_function(function, pre_index)
            if result is not None:
                return result
        return None

    def __repr__(self) -> str:
        return f"CompositeFunctionExtractor({list(self._extractors)!r})"


class DefaultFunctionExtractor(ComposableExtractor):
    """Extracts schema functions from tagged declarations.

    Usage:
        extractor = DefaultFunctionExtractor()
        functions = extractor.member_functions(MyType, pre_index)
    """

    def __init__(
        self,
        configure_lambdas: ConfigureLambdaHandler | None = None,
        include_filter: MemberFilter | None = None,
        introspector: MemberIntrospector | None = None,
    ) -> None:
        self._configure_lambdas = configure_lambdas or default_configure_lambdas
        self._include_filter = include_filter or is_public_and_restricted
        if introspector is None:
            from dslschema.introspection import PythonIntrospector

            introspector = PythonIntrospector()
        self._introspector = introspector

    # ================================================================
    # FunctionExtractor
    # ================================================================

    def member_functions(
        self, host_type: Any, pre_index: SchemaPreIndex
    ) -> list[SchemaMemberFunction]:
        this_type_ref = pre_index.resolve(host_type)
        claimed = pre_index.functions_claimed_by(host_type)

        result: list[SchemaMemberFunction] = []
        for function in self._introspector.member_functions(host_type):
            if not self._is_included(function):
                logger.debug("{}.{} skipped by member filter", this_type_ref, function.name)
                continue
            if function.name in claimed:
                logger.debug("{}.{} claimed by a property", this_type_ref, function.name)
                continue
            result.append(self._member_function(host_type, this_type_ref, function, pre_index))
        return result

    def constructors(self, host_type: Any, pre_index: SchemaPreIndex) -> list[DataConstructor]:
        this_type_ref = pre_index.resolve(host_type)
        semantics = Pure(this_type_ref)
        return [
            DataConstructor(
                member_function_parameters(
                    constructor, semantics, host_type, pre_index, self._configure_lambdas
                ),
                this_type_ref,
            )
            for constructor in self._introspector.constructors(host_type)
            if self._is_included(constructor)
        ]

    def top_level_function(
        self, function: FunctionDescriptor, pre_index: SchemaPreIndex
    ) -> DataTopLevelFunction:
        if function.instance_parameter is not None:
            raise ShapeError(
                f"top-level function {function.name} must not have a receiver",
                code=ErrorCode.UNEXPECTED_RECEIVER,
                context=ErrorContext(
                    operation="top_level_function",
                    member_name=function.name,
                    component="orchestrator",
                ),
            )

        semantics = Pure(pre_index.resolve(function.return_type))
        return_class = _return_class(function)
        params = top_level_function_parameters(
            function, semantics, return_class, pre_index, self._configure_lambdas
        )
        return DataTopLevelFunction(function.namespace, function.name, params, semantics)

    # ================================================================
    # Internals
    # ================================================================

    def _is_included(self, member: FunctionDescriptor) -> bool:
        return member.is_public and self._include_filter.should_include_member(member)

    def _member_function(
        self,
        in_type: Any,
        this_type_ref: DataTypeRef,
        function: FunctionDescriptor,
        pre_index: SchemaPreIndex,
    ) -> SchemaMemberFunction:
        pre_index.resolve(function.return_type)
        return_class = _return_class(function)

        semantics = infer_function_semantics(function, in_type, pre_index, self._configure_lambdas)
        params = member_function_parameters(
            function, semantics, return_class, pre_index, self._configure_lambdas
        )
        is_direct_access_only = function.has_tag(AccessFromCurrentReceiverOnlyTag)

        if isinstance(semantics, Builder):
            if len(params) != 1:
                raise SemanticsConflictError(
                    f"{this_type_ref}.{function.name}: a builder function must accept "
                    f"exactly one parameter; found {len(params)}",
                    code=ErrorCode.BUILDER_PARAMETER_COUNT,
                    context=ErrorContext(
                        operation="member_functions",
                        type_name=str(this_type_ref),
                        member_name=function.name,
                        component="orchestrator",
                    ),
                )
            return DataBuilderFunction(this_type_ref, function.name, is_direct_access_only, params[0])

        return DataMemberFunction(
            this_type_ref, function.name, params, is_direct_access_only, semantics
        )


def _return_class(function: FunctionDescriptor) -> type:
    return_type = normalize(unwrap_optional(function.return_type))
    if not is_class(return_type):
        raise ShapeError(
            f"return type {return_type!r} of {function.name} classified as a non-class "
            "is used in the schema",
            code=ErrorCode.NOT_A_CLASS,
            context=ErrorContext(member_name=function.name, component="orchestrator"),
        )
    return return_type


# ============================================================================
# Whole-schema extraction
# ============================================================================


@dataclass(frozen=True)
class TypeFunctions:
    """Schema functions extracted for one type."""

    data_type: DataTypeRef
    member_functions: tuple[SchemaMemberFunction, ...]
    constructors: tuple[DataConstructor, ...]


@dataclass(frozen=True)
class SchemaFunctions:
    """All schema functions of one extraction pass."""

    types: tuple[TypeFunctions, ...]
    top_level_functions: tuple[DataTopLevelFunction, ...] = ()

    def for_type(self, data_type: DataTypeRef) -> TypeFunctions | None:
        for entry in self.types:
            if entry.data_type == data_type:
                return entry
        return None


class ExtractionOrchestrator:
    """Runs an extractor over every type of a pre-indexed schema.

    The pre-index must already hold every type and property; the first
    error aborts the whole pass, so a schema is never partially built.

    Usage:
        orchestrator = ExtractionOrchestrator(pre_index)
        functions = orchestrator.extract([Container, Item], [make_item])
    """

    def __init__(
        self,
        pre_index: SchemaPreIndex,
        extractor: FunctionExtractor | None = None,
    ) -> None:
        self._pre_index = pre_index
        self._extractor = extractor or DefaultFunctionExtractor()

    @property
    def extractor(self) -> FunctionExtractor:
        return self._extractor

    def extract_type(self, host_type: Any) -> TypeFunctions:
        data_type = self._pre_index.resolve(host_type)
        return TypeFunctions(
            data_type=data_type,
            member_functions=tuple(self._extractor.member_functions(host_type, self._pre_index)),
            constructors=tuple(self._extractor.constructors(host_type, self._pre_index)),
        )

    def extract(
        self,
        types: Iterable[Any],
        top_level_functions: Iterable[FunctionDescriptor] = (),
    ) -> SchemaFunctions:
        type_entries = tuple(self.extract_type(host_type) for host_type in types)

        top_level: list[DataTopLevelFunction] = []
        for function in top_level_functions:
            extracted = self._extractor.top_level_function(function, self._pre_index)
            if extracted is not None:
                top_level.append(extracted)

        logger.info(
            "Extracted {} member functions and {} constructors across {} types, "
            "{} top-level functions",
            sum(len(t.member_functions) for t in type_entries),
            sum(len(t.constructors) for t in type_entries),
            len(type_entries),
            len(top_level),
        )
        return SchemaFunctions(type_entries, tuple(top_level))


def extract_schema_functions(
    types: Iterable[Any],
    top_level_functions: Iterable[FunctionDescriptor],
    pre_index: SchemaPreIndex,
    extractor: FunctionExtractor | None = None,
) -> SchemaFunctions:
    """One-shot extraction over an already populated pre-index.

    Raises:
        ScopeError: A type (or a type it refers to) is not registered.
        SemanticsConflictError: A declaration contradicts its tags.
        ShapeError: A declaration has an unsupported shape.
    """
    return ExtractionOrchestrator(pre_index, extractor).extract(types, top_level_functions)
