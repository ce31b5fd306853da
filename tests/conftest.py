"""Pytest configuration and shared fixtures."""

import os
from typing import Iterator
from unittest.mock import patch

import pytest
import structlog

from jp_rules.config import settings as settings_module


@pytest.fixture(autouse=True)
def isolated_settings() -> Iterator[None]:
    """Drop the cached global settings and any RULES_/LOG_ overrides from the environment."""
    env = {k: v for k, v in os.environ.items() if not k.startswith(("RULES_", "LOG_"))}
    with patch.dict(os.environ, env, clear=True):
        settings_module._settings = None
        yield
        settings_module._settings = None
    structlog.reset_defaults()
