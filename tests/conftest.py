"""Shared fixtures: isolate configuration from the developer's environment."""

import pytest

from finance_tracker.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Default locale settings and a fresh settings cache for every test."""
    for var in (
        "FINANCE_API_BASE_URL",
        "FINANCE_API_HOSTNAME",
        "FINANCE_API_PRODUCTION_URL",
        "FINANCE_API_DEVELOPMENT_URL",
        "FINANCE_API_TIMEOUT_SECONDS",
        "FINANCE_FORMAT_LOCALE",
        "FINANCE_FORMAT_CURRENCY",
        "FINANCE_FORMAT_TIMEZONE",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
