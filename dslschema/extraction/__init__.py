"""Function extraction for declarative-DSL schemas.

This package decides, for every declared member of a schema type, what
the restricted configuration language may do with it:

    member filter -> role-tag classifier -> parameter classifier

Usage:
    from dslschema.extraction import DefaultFunctionExtractor, ExtractionOrchestrator
    from dslschema.introspection import index_types

    pre_index = index_types([Container, Item])
    functions = ExtractionOrchestrator(pre_index).extract([Container, Item])
"""

from dslschema.extraction.descriptors import (
    AccessFromCurrentReceiverOnlyTag,
    AddingTag,
    BuilderTag,
    ConfiguringTag,
    FunctionDescriptor,
    HiddenInDslTag,
    ParameterDescriptor,
    ParameterKind,
    RestrictedTag,
    Visibility,
)
from dslschema.extraction.types import (
    AccessAndConfigure,
    AccessAndConfigureReturnType,
    AddAndConfigure,
    Builder,
    ConfigureBlockRequirement,
    ConfiguringLambdaArgument,
    DataBuilderFunction,
    DataConstructor,
    DataMemberFunction,
    DataParameter,
    DataProperty,
    DataTopLevelFunction,
    DataTypeRef,
    PropertyAccessor,
    PropertyMode,
    Pure,
    StoreValueInProperty,
    UnknownParameterSemantics,
)
from dslschema.extraction.protocols import (
    ConfigureLambdaHandler,
    FunctionExtractor,
    MemberFilter,
    MemberIntrospector,
    PropertyIndex,
    TypeRefResolver,
)
from dslschema.extraction.filters import (
    all_of,
    any_of,
    is_public,
    is_public_and_not_hidden,
    is_public_and_restricted,
    member_filter,
    negate,
)
from dslschema.extraction.lambdas import CallableConfigureLambdaHandler
from dslschema.extraction.pre_index import PreIndex
from dslschema.extraction.semantics import infer_function_semantics
from dslschema.extraction.orchestrator import (
    CompositeFunctionExtractor,
    DefaultFunctionExtractor,
    ExtractionOrchestrator,
    SchemaFunctions,
    TypeFunctions,
    compose,
    extract_schema_functions,
)

__all__ = [
    "AccessAndConfigure",
    "AccessAndConfigureReturnType",
    "AccessFromCurrentReceiverOnlyTag",
    "AddAndConfigure",
    "AddingTag",
    "Builder",
    "BuilderTag",
    "CallableConfigureLambdaHandler",
    "CompositeFunctionExtractor",
    "ConfigureBlockRequirement",
    "ConfigureLambdaHandler",
    "ConfiguringLambdaArgument",
    "ConfiguringTag",
    "DataBuilderFunction",
    "DataConstructor",
    "DataMemberFunction",
    "DataParameter",
    "DataProperty",
    "DataTopLevelFunction",
    "DataTypeRef",
    "DefaultFunctionExtractor",
    "ExtractionOrchestrator",
    "FunctionDescriptor",
    "FunctionExtractor",
    "HiddenInDslTag",
    "MemberFilter",
    "MemberIntrospector",
    "ParameterDescriptor",
    "ParameterKind",
    "PreIndex",
    "PropertyAccessor",
    "PropertyIndex",
    "PropertyMode",
    "Pure",
    "RestrictedTag",
    "SchemaFunctions",
    "StoreValueInProperty",
    "TypeFunctions",
    "TypeRefResolver",
    "UnknownParameterSemantics",
    "Visibility",
    "all_of",
    "any_of",
    "compose",
    "extract_schema_functions",
    "infer_function_semantics",
    "is_public",
    "is_public_and_not_hidden",
    "is_public_and_restricted",
    "member_filter",
    "negate",
]
