"""Shared pytest fixtures for easyhighlight tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from easyhighlight.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    """Keep a cached Settings instance from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
