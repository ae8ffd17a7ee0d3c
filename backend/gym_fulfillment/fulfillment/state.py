# backend/gym_fulfillment/fulfillment/state.py

"""
ConversationApp のシンプルな状態管理モジュール。

- アプリ全体で共有する ConversationApp インスタンスを提供
- テスト時にリセットできるようにする
"""

from __future__ import annotations

from typing import Optional

from gym_fulfillment.conversation import ConversationApp
from gym_fulfillment.notifications.factory import reset_notification_service

from .handlers import build_conversation_app

_conversation_app: Optional[ConversationApp] = None


def get_conversation_app() -> ConversationApp:
    """
    共有の ConversationApp インスタンスを返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _conversation_app
    if _conversation_app is None:
        _conversation_app = build_conversation_app()
    return _conversation_app


def reset_state() -> None:
    """
    テスト用に ConversationApp と NotificationService のシングルトン状態をリセットする。
    """
    global _conversation_app
    _conversation_app = None
    reset_notification_service()
