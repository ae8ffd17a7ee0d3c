# backend/tests/conftest.py
"""
Pytest configuration for Action Gym fulfillment backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import gym_fulfillment.*` works correctly in tests.
- Ensures Actions API environment variables for tests are set
  with safe dummy values (the push endpoint never points at Google).
- Resets shared singletons between tests.
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
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    """
    os.environ.setdefault("ACTIONS_API_ENDPOINT", "https://push.example.com/v2/conversations:send")
    os.environ.setdefault("ACTIONS_API_SANDBOX", "true")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(autouse=True)
def _reset_shared_state():
    from gym_fulfillment.fulfillment.state import reset_state

    reset_state()
    yield
    reset_state()
