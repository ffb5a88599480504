"""Tests for DefaultFunctionExtractor, extractor composition and ExtractionOrchestrator.

Verifies that the default extractor applies filter -> classify ->
parameterize over real host types, and that composites merge results
(member functions and constructors) or pick the first answer (top-level
functions) in priority order.
"""

from collections.abc import Callable

import pytest
from hypothesis import given
from hypothesis import strategies as st

from dsl_model import Box, Container, Item, Settings, SpecialSettings, item_count, make_item
from dslschema.annotations import adding, builder, configuring, restricted
from dslschema.extraction import (
    AccessAndConfigure,
    AccessAndConfigureReturnType,
    AddAndConfigure,
    CompositeFunctionExtractor,
    ConfigureBlockRequirement,
    DataBuilderFunction,
    DataConstructor,
    DataMemberFunction,
    DataParameter,
    DataTopLevelFunction,
    DataTypeRef,
    DefaultFunctionExtractor,
    ExtractionOrchestrator,
    FunctionDescriptor,
    ParameterDescriptor,
    ParameterKind,
    PropertyAccessor,
    Pure,
    StoreValueInProperty,
    UnknownParameterSemantics,
    compose,
    extract_schema_functions,
    is_public_and_not_hidden,
)
from dslschema.extraction.orchestrator import ComposableExtractor
from dslschema.introspection import describe_top_level_function, index_types
from dslschema.types.errors import ErrorCode, ScopeError, SemanticsConflictError, ShapeError


class TwoValueBuilder:
    @restricted
    @builder
    def both(self, first: int, second: int) -> "TwoValueBuilder":
        return self


class SettingsHolder:
    settings: Settings

    @restricted
    @adding
    def add_special(self, configure: Callable[[Settings], None]) -> SpecialSettings:
        return SpecialSettings()

    @restricted
    @adding
    def add_maybe(self, name: str, configure: Callable[[Item], None]) -> Item | None:
        return Item(name)

    @restricted
    @configuring(property_name="settings")
    def special_settings(self, configure: Callable[[SpecialSettings], None]) -> None:
        pass

    @restricted
    @configuring(property_name="settings")
    def maybe_settings(self, configure: Callable[[Settings], None]) -> Settings | None:
        return self.settings


class StubExtractor(ComposableExtractor):
    """Extractor returning canned results, for composition tests."""

    def __init__(self, label, members=(), constructors=(), top_level=None):
        self.label = label
        self._members = list(members)
        self._constructors = list(constructors)
        self._top_level = top_level

    def member_functions(self, host_type, pre_index):
        return list(self._members)

    def constructors(self, host_type, pre_index):
        return list(self._constructors)

    def top_level_function(self, function, pre_index):
        return self._top_level

    def __repr__(self):
        return f"StubExtractor({self.label!r})"


def pure_member(name):
    return DataMemberFunction(DataTypeRef("T"), name, (), False, Pure(DataTypeRef("int")))


def top_level(name):
    return DataTopLevelFunction("pkg", name, (), Pure(DataTypeRef("int")))


# ============================================================================
# DefaultFunctionExtractor
# ============================================================================


class TestDefaultMemberFunctions:
    """Tests for DefaultFunctionExtractor.member_functions."""

    @pytest.fixture
    def members(self, extractor, pre_index):
        return {f.name: f for f in extractor.member_functions(Container, pre_index)}

    def test_included_members(self, members):
        assert list(members) == [
            "configure_settings",
            "debug_dump",
            "describe",
            "item",
            "reset",
            "widget",
        ]

    def test_untagged_members_excluded_by_default(self, members):
        assert "untagged" not in members

    def test_non_public_members_excluded(self, members):
        assert "_internal" not in members

    def test_property_accessors_are_claimed(self, members):
        assert "get_label" not in members

    def test_adding_member(self, members, pre_index, refs):
        item = members["item"]
        assert item == DataMemberFunction(
            receiver=refs["Container"],
            name="item",
            parameters=(
                DataParameter(
                    "name",
                    DataTypeRef("str"),
                    False,
                    StoreValueInProperty(pre_index.property_named(Item, "name")),
                ),
            ),
            is_direct_access_only=False,
            semantics=AddAndConfigure(refs["Item"], ConfigureBlockRequirement.OPTIONAL),
        )

    def test_configuring_member(self, members):
        settings = members["configure_settings"]
        assert isinstance(settings.semantics, AccessAndConfigure)
        assert settings.parameters == ()

    def test_direct_access_only(self, members):
        assert members["reset"].is_direct_access_only is True
        assert members["describe"].is_direct_access_only is False

    def test_builder_member(self, extractor, pre_index, refs):
        (size,) = extractor.member_functions(Box, pre_index)
        assert isinstance(size, DataBuilderFunction)
        assert size.receiver == refs["Box"]
        assert size.data_parameter.type == DataTypeRef("int")
        assert size.semantics.return_value_type == refs["Box"]
        assert size.parameters == (size.data_parameter,)

    def test_builder_parameter_count(self, extractor):
        pre_index = index_types([TwoValueBuilder])
        with pytest.raises(SemanticsConflictError) as exc_info:
            extractor.member_functions(TwoValueBuilder, pre_index)
        assert exc_info.value.code == ErrorCode.BUILDER_PARAMETER_COUNT

    def test_custom_filter(self, pre_index):
        extractor = DefaultFunctionExtractor(include_filter=is_public_and_not_hidden)
        names = [f.name for f in extractor.member_functions(Container, pre_index)]
        assert "untagged" in names
        assert "debug_dump" not in names
        assert "_internal" not in names
        assert "get_label" not in names


class TestBlockParameters:
    """Blocks the classifier accepts never come back as value parameters."""

    @pytest.fixture
    def members(self, extractor):
        pre_index = index_types([SettingsHolder, Item, Settings, SpecialSettings])
        return {f.name: f for f in extractor.member_functions(SettingsHolder, pre_index)}

    def test_adding_with_block_for_supertype(self, members):
        add_special = members["add_special"]
        assert add_special.parameters == ()
        assert add_special.semantics == AddAndConfigure(
            DataTypeRef("dsl_model.SpecialSettings"),
            ConfigureBlockRequirement.REQUIRED,
        )

    def test_adding_with_optional_return_type(self, members):
        add_maybe = members["add_maybe"]
        assert [p.name for p in add_maybe.parameters] == ["name"]
        assert add_maybe.semantics.configure_block_requirement is ConfigureBlockRequirement.REQUIRED

    def test_configuring_with_block_for_subtype(self, members):
        special = members["special_settings"]
        assert special.parameters == ()
        assert isinstance(special.semantics.accessor, PropertyAccessor)
        assert special.semantics.accessor.data_property.name == "settings"

    def test_configuring_with_optional_return_type(self, members):
        maybe = members["maybe_settings"]
        assert maybe.parameters == ()
        assert maybe.semantics.return_type is AccessAndConfigureReturnType.CONFIGURED_OBJECT


class TestDefaultConstructors:
    def test_restricted_dataclass_constructor(self, extractor, pre_index, refs):
        (constructor,) = extractor.constructors(Item, pre_index)
        assert constructor == DataConstructor(
            (
                DataParameter("name", DataTypeRef("str"), False, UnknownParameterSemantics()),
                DataParameter("count", DataTypeRef("int"), True, UnknownParameterSemantics()),
            ),
            refs["Item"],
        )
        assert constructor.semantics == Pure(refs["Item"])

    def test_no_argument_constructor(self, extractor, pre_index, refs):
        assert extractor.constructors(Container, pre_index) == [DataConstructor((), refs["Container"])]

    def test_untagged_class_has_no_constructors(self, extractor, pre_index):
        assert extractor.constructors(Settings, pre_index) == []
        assert extractor.constructors(Box, pre_index) == []


class TestDefaultTopLevelFunctions:
    def test_trailing_block_excluded(self, extractor, pre_index, refs):
        function = extractor.top_level_function(describe_top_level_function(make_item), pre_index)
        assert function == DataTopLevelFunction(
            package_name="dsl_model",
            name="make_item",
            parameters=(
                DataParameter("name", DataTypeRef("str"), False, UnknownParameterSemantics()),
            ),
            semantics=Pure(refs["Item"]),
        )

    def test_plain_parameters(self, extractor, pre_index):
        function = extractor.top_level_function(describe_top_level_function(item_count), pre_index)
        assert [p.name for p in function.parameters] == ["container", "minimum"]
        assert function.semantics == Pure(DataTypeRef("int"))

    def test_receiver_is_rejected(self, extractor, pre_index):
        descriptor = FunctionDescriptor(
            name="size",
            return_type=int,
            parameters=(ParameterDescriptor("self", Box, ParameterKind.INSTANCE),),
        )
        with pytest.raises(ShapeError) as exc_info:
            extractor.top_level_function(descriptor, pre_index)
        assert exc_info.value.code == ErrorCode.UNEXPECTED_RECEIVER

    def test_non_class_return_type(self, extractor, pre_index):
        descriptor = FunctionDescriptor(name="names", return_type=list[str])
        with pytest.raises(ShapeError) as exc_info:
            extractor.top_level_function(descriptor, pre_index)
        assert exc_info.value.code == ErrorCode.UNCLASSIFIABLE_TYPE


# ============================================================================
# Composition
# ============================================================================


class TestComposition:
    """Tests for `+` / compose()."""

    def test_plus_builds_composite(self):
        a, b = StubExtractor("a"), StubExtractor("b")
        combined = a + b
        assert isinstance(combined, CompositeFunctionExtractor)
        assert combined.extractors == (a, b)

    def test_composites_are_flattened(self):
        a, b, c = StubExtractor("a"), StubExtractor("b"), StubExtractor("c")
        assert ((a + b) + c).extractors == (a, b, c)
        assert (a + (b + c)).extractors == (a, b, c)
        assert compose(a + b, c + a).extractors == (a, b, c, a)

    def test_member_functions_union_without_duplicates(self, pre_index):
        first = StubExtractor("first", members=[pure_member("x"), pure_member("y")])
        second = StubExtractor("second", members=[pure_member("y"), pure_member("z")])
        merged = (first + second).member_functions(Container, pre_index)
        assert [f.name for f in merged] == ["x", "y", "z"]

    def test_constructors_union_without_duplicates(self, pre_index):
        shared = DataConstructor((), DataTypeRef("T"))
        other = DataConstructor(
            (DataParameter("n", DataTypeRef("int"), False, UnknownParameterSemantics()),),
            DataTypeRef("T"),
        )
        first = StubExtractor("first", constructors=[shared])
        second = StubExtractor("second", constructors=[shared, other])
        assert (first + second).constructors(Container, pre_index) == [shared, other]

    def test_top_level_first_answer_wins(self, pre_index):
        descriptor = describe_top_level_function(item_count)
        empty = StubExtractor("empty")
        first = StubExtractor("first", top_level=top_level("first"))
        second = StubExtractor("second", top_level=top_level("second"))
        assert (empty + first + second).top_level_function(descriptor, pre_index).name == "first"
        assert (empty + empty).top_level_function(descriptor, pre_index) is None

    def test_default_extractors_compose(self, pre_index):
        combined = DefaultFunctionExtractor() + DefaultFunctionExtractor(
            include_filter=is_public_and_not_hidden
        )
        names = [f.name for f in combined.member_functions(Container, pre_index)]
        # restricted members first, then the extra ones from the second extractor
        assert names[:6] == ["configure_settings", "debug_dump", "describe", "item", "reset", "widget"]
        assert names[6:] == ["untagged"]

    def test_repr(self):
        assert "StubExtractor('a')" in repr(StubExtractor("a") + StubExtractor("b"))


# ============================================================================
# ExtractionOrchestrator
# ============================================================================


class TestExtractionOrchestrator:
    def test_extract_whole_schema(self, pre_index, refs):
        orchestrator = ExtractionOrchestrator(pre_index)
        functions = orchestrator.extract(
            [Container, Item, Box],
            [describe_top_level_function(make_item)],
        )
        assert [t.data_type for t in functions.types] == [refs["Container"], refs["Item"], refs["Box"]]
        assert [f.name for f in functions.top_level_functions] == ["make_item"]

        item = functions.for_type(refs["Item"])
        assert [f.name for f in item.member_functions] == ["renamed"]
        assert len(item.constructors) == 1
        assert functions.for_type(DataTypeRef("missing")) is None

    def test_default_extractor(self, pre_index):
        assert isinstance(ExtractionOrchestrator(pre_index).extractor, DefaultFunctionExtractor)

    def test_none_top_level_results_are_dropped(self, pre_index):
        orchestrator = ExtractionOrchestrator(pre_index, StubExtractor("none"))
        functions = orchestrator.extract([Settings], [describe_top_level_function(item_count)])
        assert functions.top_level_functions == ()

    def test_first_error_aborts(self):
        pre_index = index_types([TwoValueBuilder])
        with pytest.raises(SemanticsConflictError):
            ExtractionOrchestrator(pre_index).extract([TwoValueBuilder])

    def test_one_shot_helper(self, pre_index, refs):
        functions = extract_schema_functions([Item], [], pre_index)
        assert [t.data_type for t in functions.types] == [refs["Item"]]

    def test_unregistered_type_is_out_of_scope(self):
        pre_index = index_types([Settings])
        with pytest.raises(ScopeError) as exc_info:
            extract_schema_functions([Item], [], pre_index)
        assert exc_info.value.code == ErrorCode.TYPE_NOT_IN_SCOPE


class TestCompositionProperties:
    """Property-based tests for composite merging."""

    @given(
        groups=st.lists(
            st.lists(st.sampled_from(["a", "b", "c", "d"]), max_size=4), min_size=1, max_size=4
        )
    )
    def test_union_keeps_first_seen_order(self, groups):
        extractors = [
            StubExtractor(str(i), members=[pure_member(n) for n in names])
            for i, names in enumerate(groups)
        ]
        merged = compose(*extractors).member_functions(None, None)
        expected = list(dict.fromkeys(n for names in groups for n in names))
        assert [f.name for f in merged] == expected

    @given(split=st.integers(min_value=0, max_value=4))
    def test_grouping_does_not_matter(self, split):
        extractors = [StubExtractor(str(i)) for i in range(4)]
        left = compose(*extractors[:split]) if split else None
        right = compose(*extractors[split:])
        combined = right if left is None else left + right
        assert combined.extractors == tuple(extractors)
