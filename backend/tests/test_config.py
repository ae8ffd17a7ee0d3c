# backend/tests/test_config.py

import pytest

from gym_fulfillment.notifications.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_NOTIFICATION_TITLE,
    get_actions_api_settings,
)
from gym_fulfillment.utils.config import EnvVarMissingError, get_env, get_env_bool, get_env_int


def test_get_env_required_missing(monkeypatch) -> None:
    monkeypatch.delenv("GYM_TEST_VALUE", raising=False)

    with pytest.raises(EnvVarMissingError) as exc_info:
        get_env("GYM_TEST_VALUE")

    assert exc_info.value.name == "GYM_TEST_VALUE"
    assert get_env("GYM_TEST_VALUE", default="x", required=False) == "x"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("1", True), ("YES", True), ("off", False), ("0", False)],
)
def test_get_env_bool(monkeypatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("GYM_TEST_FLAG", raw)

    assert get_env_bool("GYM_TEST_FLAG", default=not expected) is expected


def test_invalid_values_raise_runtime_error(monkeypatch) -> None:
    monkeypatch.setenv("GYM_TEST_FLAG", "maybe")
    monkeypatch.setenv("GYM_TEST_INT", "ten")

    with pytest.raises(RuntimeError):
        get_env_bool("GYM_TEST_FLAG", default=True)
    with pytest.raises(RuntimeError):
        get_env_int("GYM_TEST_INT", default=10)


def test_actions_api_settings_defaults(monkeypatch) -> None:
    for name in (
        "ACTIONS_API_ENDPOINT",
        "ACTIONS_API_SCOPE",
        "ACTIONS_API_SANDBOX",
        "ACTIONS_API_TIMEOUT_SECONDS",
        "ACTIONS_NOTIFICATION_TITLE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_actions_api_settings.cache_clear()

    settings = get_actions_api_settings()

    assert settings.endpoint == DEFAULT_ENDPOINT
    assert settings.is_in_sandbox is True
    assert settings.timeout_seconds == 10
    assert settings.notification_title == DEFAULT_NOTIFICATION_TITLE


def test_actions_api_settings_zero_timeout_disables_timeout(monkeypatch) -> None:
    monkeypatch.setenv("ACTIONS_API_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("ACTIONS_API_SANDBOX", "false")
    get_actions_api_settings.cache_clear()

    settings = get_actions_api_settings()

    assert settings.timeout_seconds is None
    assert settings.is_in_sandbox is False
