"""Pytest configuration and fixtures.

Provides environment isolation and logging configuration. All fixtures here
are autouse unless noted.
"""

from __future__ import annotations

import logging
import os

import pytest

from ferrous.config import ENV_PREFIX, reset_settings_cache

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(
        "ferrous.config.load_dotenv", lambda *_args, **_kwargs: False
    )


@pytest.fixture(autouse=True)
def isolate_settings_env(monkeypatch):
    """Clear FERROUS_* variables and the cached settings around each test."""
    for key in list(os.environ.keys()):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def ferrous_debug_logs(caplog):
    """Capture DEBUG records from the ferrous loggers (not autouse)."""
    caplog.set_level(logging.DEBUG, logger="ferrous")
    return caplog
