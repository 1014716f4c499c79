"""Shared fixtures for the probe tests."""

import pytest

from healthprobe.config import Settings, get_settings
from tests.helpers import FakeClock


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    """Testing settings with the warm-up already disabled."""
    return Settings(
        _env_file=None,
        env="testing",
        service_profile="user-api",
        service_name="user-api",
        service_version="9.9.9",
        warmup_grace_seconds=0.0,
    )
