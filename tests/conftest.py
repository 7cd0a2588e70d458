"""Pytest config: PYTHONPATH, env isolation and shared fixtures for tests."""
import sys
from pathlib import Path

import pytest

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))

from app.config import Settings, get_settings  # noqa: E402

BASE_URL_ENV_VARS = ("PROJECT_BUDDY_API_BASE_URL", "PROJECT_BUDDY_BASE_URL", "PROJECT_API_BASE_URL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """No test may pick up a base URL or tool config from the developer's environment."""
    for name in BASE_URL_ENV_VARS + ("TOOLS_CONFIG_PATH",):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(_env_file=None, project_buddy_api_base_url="http://buddy.test")
