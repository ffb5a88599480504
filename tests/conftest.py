"""
Pytest configuration and shared fixtures for dslschema tests.
"""

import pytest

from dsl_model import Box, Container, Item, Settings, SpecialSettings
from dslschema.extraction import DataTypeRef, DefaultFunctionExtractor
from dslschema.introspection import index_types

MODEL_TYPES = [Container, Item, Settings, SpecialSettings, Box]


@pytest.fixture
def pre_index():
    """Pre-index holding every sample host type."""
    return index_types(MODEL_TYPES)


@pytest.fixture
def extractor():
    return DefaultFunctionExtractor()


@pytest.fixture
def refs():
    """Schema references of the sample host types, by simple name."""
    return {t.__name__: DataTypeRef(f"dsl_model.{t.__qualname__}") for t in MODEL_TYPES}
