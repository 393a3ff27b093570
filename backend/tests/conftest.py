# backend/tests/conftest.py
"""
Pytest configuration for Notion Page Dashboard backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import app.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (e.g., NOTION_API_KEY).
- Clears cached settings / dependencies between tests so that
  monkeypatched environment variables take effect.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    """
    os.environ.setdefault("NOTION_API_KEY", "dummy-notion-api-key-for-tests")
    # Supabase が設定されているとテストが外部に出ていくので必ず外す
    os.environ.pop("SUPABASE_URL", None)
    os.environ.pop("AUTH_STORAGE_PATH", None)
    os.environ.pop("PAGE_LOOKUP_PATH", None)


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(autouse=True)
def _clear_cached_settings():
    from app.auth.config import get_account_service, get_credential_validator
    from app.dashboard.config import get_page_lookup_service
    from app.notion.config import get_notion_config
    from app.supabase_rest.config import get_supabase_config

    caches = (
        get_notion_config,
        get_supabase_config,
        get_account_service,
        get_credential_validator,
        get_page_lookup_service,
    )
    for cached in caches:
        cached.cache_clear()
    yield
    for cached in caches:
        cached.cache_clear()
