from __future__ import annotations

import pytest

from warrens.environment.registry import ChunkRegistry, default_registry


@pytest.fixture(scope="session")
def registry() -> ChunkRegistry:
    """The shipped chunk library, validated once per test session."""
    return default_registry()
