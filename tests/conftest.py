"""Pytest configuration and fixtures for Formulary tests.

This module provides common fixtures and configuration for all tests.
"""

from __future__ import annotations

import pytest

from formulary.calc import CalcEngine, CalculatorRegistry
from formulary.catalogs import get_default_registry
from formulary.config import (
    ENV_LOG_LEVEL,
    ENV_RATE_BASE_URL,
    ENV_RATE_CACHE_TTL_SECONDS,
    ENV_RATE_MAX_RETRIES,
    ENV_RATE_TIMEOUT_SECONDS,
)

FORMULARY_ENV_VARS = (
    ENV_LOG_LEVEL,
    ENV_RATE_BASE_URL,
    ENV_RATE_CACHE_TTL_SECONDS,
    ENV_RATE_MAX_RETRIES,
    ENV_RATE_TIMEOUT_SECONDS,
)


@pytest.fixture(autouse=True)
def clear_formulary_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test from default configuration.

    Tests that need a specific setting set it explicitly with monkeypatch.
    """
    for name in FORMULARY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry() -> CalculatorRegistry:
    """The built-in calculator catalog."""
    return get_default_registry()


@pytest.fixture
def engine(registry: CalculatorRegistry) -> CalcEngine:
    """An engine over the built-in catalog."""
    return CalcEngine(registry=registry)
