"""
Webhook フルフィルメント本体。

- handlers: classes / subscribe_to_notifications / cancel_class の各ハンドラ
- state: 共有 ConversationApp の生成とリセット
- router: /fulfillment エンドポイント
"""

from .handlers import build_conversation_app  # noqa: F401
