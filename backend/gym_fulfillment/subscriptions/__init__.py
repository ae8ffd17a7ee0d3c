"""
プッシュ通知の購読管理モジュール。

- schemas: NotificationSubscription / SessionState / PermissionStatus
- store: ユーザー単位のセッション状態ストア
- service: 通知許可の結果から購読を記録する record_subscription()
"""

from .schemas import (  # noqa: F401
    NOTIFICATION_INTENT,
    NotificationSubscription,
    PermissionStatus,
    SessionState,
)
from .service import MissingUpdateUserIdError, SubscriptionError, record_subscription  # noqa: F401
from .store import ConversationSessionStore, InMemorySessionStore, SessionStore  # noqa: F401
