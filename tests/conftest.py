"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from xsd_to_proto.models import Schema, parse_schema

from tests.fixtures.sample_xsds import (
    ARRAY_OF_XSD,
    COLLISION_XSD,
    INLINE_XSD,
    SIMPLE_XSD,
    TASKS_XSD,
)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def simple_schema() -> Schema:
    """Return the decoded Status/Address/Person schema."""
    return parse_schema(SIMPLE_XSD)


@pytest.fixture
def collision_schema() -> Schema:
    """Return a schema with two types that both want the name 'Person'."""
    return parse_schema(COLLISION_XSD)


@pytest.fixture
def array_of_schema() -> Schema:
    """Return a schema using ArrayOf wrapper types."""
    return parse_schema(ARRAY_OF_XSD)


@pytest.fixture
def tasks_schema() -> Schema:
    """Return a schema with time types, a choice and an enum/message clash."""
    return parse_schema(TASKS_XSD)


@pytest.fixture
def inline_schema() -> Schema:
    """Return a schema with inline field types."""
    return parse_schema(INLINE_XSD)


@pytest.fixture
def simple_xsd_file(tmp_path: Path) -> Path:
    """Write the simple schema to a temporary .xsd file."""
    path = tmp_path / "simple.xsd"
    path.write_text(SIMPLE_XSD, encoding="utf-8")
    return path
