"""Pytest configuration for the relay_providers test suite.

Every test runs with provider credentials, config file and dotenv lookups
cleared so results never depend on the developer's shell.
"""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from relay_providers.config import reset_config_cache

_ISOLATED_VARS = (
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_BASE_URL",
    "ANTHROPIC_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "OPENAI_INCLUDE_STREAM_OPTIONS",
    "OPENAI_AZURE_API_VERSION",
    "RELAY_CONFIG_FILE",
    "RELAY_TRACE_SINK",
    "RELAY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear provider env vars and point dotenv lookups at an empty path."""
    for name in _ISOLATED_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def debug_logs(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture ``relay`` records down to DEBUG level."""
    monkeypatch.setenv("RELAY_LOG_LEVEL", "DEBUG")
    caplog.set_level(logging.DEBUG, logger="relay")
    return caplog
