"""
pytest conftest: shared fixtures for unit tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture
def param():
    """Factory building a Param named "foo"."""
    from fieldparam import Param

    def build(options=None):
        return Param("foo", options)
    return build


@pytest.fixture
def settings_env(monkeypatch):
    """Set FIELDPARAM_* variables and rebuild the cached settings."""
    from fieldparam.settings import get_settings

    def apply(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"FIELDPARAM_{key.upper()}", str(value))
        get_settings.cache_clear()

    yield apply
    get_settings.cache_clear()
