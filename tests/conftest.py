"""Shared pytest fixtures for tests."""

import pytest

from json_typed import JsonParser, Schemas


@pytest.fixture
def schemas():
    """Registry with no custom schemas."""
    return Schemas.empty()


@pytest.fixture
def parser(schemas):
    """Parser bound to the empty registry."""
    return JsonParser(schemas)
