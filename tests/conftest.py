"""Pytest configuration and shared fixtures for configurator tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from furnish.application.settings import EngineSettings
from furnish.application.store import ConfigurationStore
from furnish.domain.capability import set_render_probe
from furnish.domain.constraints import DimensionPolicy
from furnish.domain.value_objects import FurnitureType


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def restore_render_probe() -> Iterator[None]:
    """Reset the memoized 3D capability around every test."""
    set_render_probe(None)
    yield
    set_render_probe(None)


@pytest.fixture
def clamp_settings() -> EngineSettings:
    """Settings that clamp out-of-range dimensions instead of rejecting them."""
    return EngineSettings(dimension_policy=DimensionPolicy.CLAMP)


@pytest.fixture
def wardrobe_store() -> ConfigurationStore:
    """A fresh wardrobe session with default values."""
    return ConfigurationStore(FurnitureType.WARDROBE)


@pytest.fixture
def stand_store() -> ConfigurationStore:
    """A fresh stand session with default values."""
    return ConfigurationStore(FurnitureType.STAND)
