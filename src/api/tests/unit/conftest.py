"""Unit test fixtures shared across bounded contexts."""

import pytest

from infrastructure.settings import (
    get_github_app_settings,
    get_settings,
    get_webhook_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    for getter in (get_settings, get_webhook_settings, get_github_app_settings):
        getter.cache_clear()
    yield
    for getter in (get_settings, get_webhook_settings, get_github_app_settings):
        getter.cache_clear()
