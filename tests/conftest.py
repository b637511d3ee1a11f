"""
Pytest configuration and fixtures for the test suite.

This module contains shared fixtures used across all tests.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest

from tests.fakes import TEST_BASE_URL
from wataxrate.core.config import LookupSettings, get_settings
from wataxrate.lookup.client import TaxLookupClient

type Handler = Callable[[httpx.Request], object]


@pytest.fixture(autouse=True)
def _fresh_settings_cache() -> Iterator[None]:
    """Make every test load settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings() -> LookupSettings:
    """Return settings pointing at a fake endpoint."""
    return LookupSettings(
        base_url=TEST_BASE_URL,
        timeout=None,
        max_attempts=3,
        attempt_timeout=1.0,
        user_agent="wataxrate-tests",
    )


@pytest.fixture()
def make_client(settings: LookupSettings) -> Callable[[Handler], TaxLookupClient]:
    """Return a factory building a client whose requests go to ``handler``."""

    def _make(handler: Handler) -> TaxLookupClient:
        return TaxLookupClient(settings=settings, transport=httpx.MockTransport(handler))

    return _make
