# backend/gym_fulfillment/notifications/factory.py

"""
通知サービスの簡易ファクトリ。

- GoogleCredentialProvider と ActionsPushClient を組み合わせた NotificationService を返す。
- クレデンシャルのクライアントはプロバイダ側で1度だけ生成されるため、
  サービス自体もプロセス全体で1つを共有する。
"""

from __future__ import annotations

from typing import Optional

from .client import ActionsPushClient
from .config import get_actions_api_settings
from .credentials import GoogleCredentialProvider
from .service import NotificationService

_notification_service: Optional[NotificationService] = None


def get_notification_service() -> NotificationService:
    """
    アプリ全体で共有する NotificationService を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _notification_service
    if _notification_service is None:
        settings = get_actions_api_settings()
        _notification_service = NotificationService(
            GoogleCredentialProvider(scopes=[settings.scope]),
            ActionsPushClient(settings),
            title=settings.notification_title,
        )
    return _notification_service


def reset_notification_service() -> None:
    """
    テスト用に NotificationService のシングルトン状態をリセットする。
    """
    global _notification_service
    _notification_service = None
    get_actions_api_settings.cache_clear()
