"""Shared pytest configuration.

The environment is pinned before any application module is imported, since
the default configuration is loaded at import time.
"""

import os

os.environ["APP_ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["OIDC_ENABLED"] = "false"
os.environ["LOG_FILE"] = ""

from tests.fixtures import *  # noqa: E402,F401,F403
