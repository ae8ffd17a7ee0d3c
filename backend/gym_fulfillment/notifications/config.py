# backend/gym_fulfillment/notifications/config.py

"""
Actions API（プッシュ通知送信）関連の設定値読み出しモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from gym_fulfillment.utils.config import get_env, get_env_bool, get_env_int

DEFAULT_ENDPOINT = "https://actions.googleapis.com/v2/conversations:send"
DEFAULT_SCOPE = "https://www.googleapis.com/auth/actions.fulfillment.conversation"
DEFAULT_NOTIFICATION_TITLE = "Test Notification from Action Gym"


@dataclass(frozen=True)
class ActionsApiSettings:
    """
    Actions API 呼び出しに使う設定値のまとまり。

    timeout_seconds が None の場合はタイムアウトなしで待つ。
    """

    endpoint: str = DEFAULT_ENDPOINT
    scope: str = DEFAULT_SCOPE
    is_in_sandbox: bool = True
    timeout_seconds: Optional[int] = 10
    notification_title: str = DEFAULT_NOTIFICATION_TITLE


@lru_cache()
def get_actions_api_settings() -> ActionsApiSettings:
    """
    環境変数から ActionsApiSettings を構築する。

    任意:
      - ACTIONS_API_ENDPOINT         (デフォルト: conversations:send の URL)
      - ACTIONS_API_SCOPE            (デフォルト: actions.fulfillment.conversation)
      - ACTIONS_API_SANDBOX          (デフォルト: true)
      - ACTIONS_API_TIMEOUT_SECONDS  (デフォルト: 10、0 でタイムアウトなし)
      - ACTIONS_NOTIFICATION_TITLE   (デフォルト: Test Notification from Action Gym)
    """
    endpoint = get_env("ACTIONS_API_ENDPOINT", default=DEFAULT_ENDPOINT, required=False)
    scope = get_env("ACTIONS_API_SCOPE", default=DEFAULT_SCOPE, required=False)
    is_in_sandbox = get_env_bool("ACTIONS_API_SANDBOX", default=True)

    timeout_raw = get_env_int("ACTIONS_API_TIMEOUT_SECONDS", default=10)
    if timeout_raw < 0:
        raise RuntimeError(
            f"ACTIONS_API_TIMEOUT_SECONDS must not be negative: {timeout_raw}"
        )
    timeout_seconds = timeout_raw or None

    notification_title = get_env(
        "ACTIONS_NOTIFICATION_TITLE",
        default=DEFAULT_NOTIFICATION_TITLE,
        required=False,
    )

    return ActionsApiSettings(
        endpoint=endpoint,
        scope=scope,
        is_in_sandbox=is_in_sandbox,
        timeout_seconds=timeout_seconds,
        notification_title=notification_title,
    )
