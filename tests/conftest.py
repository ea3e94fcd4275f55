"""Shared pytest fixtures and configuration."""

from collections.abc import Callable, Iterator
from itertools import count

import pytest

from trackboard.state_store import StateStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def store() -> Iterator[StateStore]:
    """Create an in-memory StateStore."""
    s = StateStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """ID factory producing id-1, id-2, ... so tests can predict generated IDs."""
    counter = count(1)
    return lambda: f"id-{next(counter)}"
