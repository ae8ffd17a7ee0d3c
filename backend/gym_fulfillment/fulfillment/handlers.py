# backend/gym_fulfillment/fulfillment/handlers.py

"""
Webhook ハンドラの定義。

- classes: 曜日ごとのクラス一覧を回答
- subscribe_to_notifications: 通知許可の結果から購読を記録
- cancel_class: 購読中のユーザー全員にプッシュ通知を送信
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from gym_fulfillment.conversation import Conversation, ConversationApp, Suggestion
from gym_fulfillment.notifications.factory import get_notification_service
from gym_fulfillment.notifications.service import NotificationService
from gym_fulfillment.schedule.service import classes_for_day
from gym_fulfillment.subscriptions.schemas import NOTIFICATION_INTENT, NOTIFICATION_SLOT_PARAM
from gym_fulfillment.subscriptions.service import parse_notification_slot, record_subscription
from gym_fulfillment.subscriptions.store import ConversationSessionStore

HANDLER_CLASSES = "classes"
HANDLER_SUBSCRIBE = "subscribe_to_notifications"
HANDLER_CANCEL_CLASS = "cancel_class"


def build_conversation_app(
    *,
    notification_service_factory: Callable[[], NotificationService] = get_notification_service,
    clock: Callable[[], date] = date.today,
) -> ConversationApp:
    """
    3つのハンドラを登録した ConversationApp を生成する。

    :param notification_service_factory: cancel_class 実行時に NotificationService を返す関数。
        クレデンシャル読み込みを最初の通知送信まで遅らせるため、インスタンスではなく関数で受け取る。
    :param clock: 「今日」の日付を返す関数（曜日未指定時に使用）。
    """
    app = ConversationApp()

    @app.handle(HANDLER_CLASSES)
    def handle_classes(conv: Conversation) -> None:
        answer = classes_for_day(conv.intent_param("day"), today=clock())
        conv.add(answer.text)
        conv.add(*(Suggestion(title=title) for title in answer.suggestions))

    @app.handle(HANDLER_SUBSCRIBE)
    def handle_subscribe(conv: Conversation) -> None:
        status, update_user_id = parse_notification_slot(
            conv.session_params.get(NOTIFICATION_SLOT_PARAM)
        )
        store = ConversationSessionStore(conv)
        # ユーザー ID と通知の起動インテントを user params に保存する
        record_subscription(
            store,
            store.user_key,
            status,
            update_user_id,
            intent_name=NOTIFICATION_INTENT,
        )

    @app.handle(HANDLER_CANCEL_CLASS)
    async def handle_cancel_class(conv: Conversation) -> None:
        store = ConversationSessionStore(conv)
        state = store.get(store.user_key)
        service = notification_service_factory()
        result = await service.notify_all_subscribers(state.notification_subscriptions)
        conv.add(result.message)

    return app
