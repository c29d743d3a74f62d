"""
Shared pytest fixtures and configuration for datapage tests.

This module provides a private accessor cache, sample record lists and
configuration cleanup used across the unit tests.
"""

import pytest

from datapage.config import DEFAULT_SEPARATOR, set_default_separator
from datapage.resolver import AccessorCache
from tests.records import Address, Person, TestObject


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests without external dependencies")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer")


@pytest.fixture
def accessor_cache() -> AccessorCache:
    """A private cache so tests can observe entries without touching the global one."""
    return AccessorCache("test")


@pytest.fixture
def people() -> list[Person]:
    return [
        Person("carol", 35, Address("Rome")),
        Person("alice", 30, Address("Milan")),
        Person("bob", None, None),
        Person("dave", 30, Address(None)),
    ]


@pytest.fixture
def test_objects() -> list[TestObject]:
    return [TestObject("B", 2), TestObject("A", 1), TestObject("C", 3)]


@pytest.fixture
def restore_default_separator():
    """Restores the process-wide separator after tests that change it."""
    yield
    set_default_separator(DEFAULT_SEPARATOR)
