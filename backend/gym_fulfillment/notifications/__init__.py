
"""
プッシュ通知レイヤ用モジュール群。

構成イメージ:
- config: Actions API の設定値（エンドポイント, スコープ, sandbox, タイムアウト等）
- schemas: PushNotification / DeliveryResult
- credentials: google-auth によるアクセストークン取得
- client: Actions API への HTTP クライアント
- service: 購読者全員への並行送信（NotificationService）
- factory: アプリ全体で共有する NotificationService の生成
"""

from .schemas import DeliveryResult, PushNotification  # noqa: F401
from .service import AuthError, DeliveryError, NotificationError, NotificationService  # noqa: F401
