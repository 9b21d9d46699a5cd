"""
Pytest configuration shared by the unit suite.

Tracing is switched off before anything imports Langfuse, and the cached
settings are reset around each test so environment patches take effect.
"""

import os
import logging

# Must be set BEFORE langfuse is imported
os.environ["LANGFUSE_TRACING_ENABLED"] = "false"
# Keeps reviewdesk.bootstrap.components from instrumenting the Gemini SDK
os.environ["TESTING"] = "true"

_langfuse_logger = logging.getLogger("langfuse")
_langfuse_logger.setLevel(logging.CRITICAL)
_langfuse_logger.propagate = False

import pytest  # noqa: E402

from reviewdesk.components.configuration.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
