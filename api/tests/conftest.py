"""
Pytest fixtures for FormCanvas testing.

This module provides:
1. Settings fixtures (isolated from the process environment)
2. An engine wired to those settings
"""

import pytest

from formcanvas.config import Settings, get_settings
from formcanvas.services.canvas_engine import CanvasEngine


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop the cached settings so env changes in one test never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default engine settings in the testing environment."""
    return Settings(environment="testing", _env_file=None)


@pytest.fixture
def unlimited_settings() -> Settings:
    """Settings without a row width cap."""
    return Settings(environment="testing", max_row_children=None, _env_file=None)


@pytest.fixture
def engine(settings: Settings) -> CanvasEngine:
    return CanvasEngine(settings=settings)
