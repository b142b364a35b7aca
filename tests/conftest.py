import pytest

from typed_struct import SchemaRegistry
from typed_struct.config import reset


@pytest.fixture
def registry():
    """A fresh schema registry, so struct names may repeat across tests."""
    return SchemaRegistry()


@pytest.fixture(autouse=True)
def default_settings():
    yield
    reset()
