"""
会話プラットフォームとの Webhook 連携モジュール。

- schemas: Webhook リクエスト／レスポンスの Pydantic モデル
- app: Conversation と、ハンドラ名で処理を振り分ける ConversationApp
"""

from .app import Conversation, ConversationApp, ConversationError, UnknownHandlerError  # noqa: F401
from .schemas import Suggestion, WebhookRequest, WebhookResponse  # noqa: F401
