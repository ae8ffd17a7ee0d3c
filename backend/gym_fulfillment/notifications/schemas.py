# backend/gym_fulfillment/notifications/schemas.py

"""
プッシュ通知メッセージのスキーマ定義。

Actions API の customPushMessage にそのまま載せる形（camelCase）で出力する。

※ セキュリティ上の観点から、アクセストークンはメッセージに含めないこと。
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gym_fulfillment.subscriptions.schemas import NotificationSubscription

SUCCESS_MESSAGE = "A notification has been sent to all subscribed users."


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UserNotification(_CamelModel):
    title: str = Field(..., description="通知の表示テキスト")


class PushTarget(_CamelModel):
    user_id: str = Field(..., alias="userId")
    intent: str


class PushNotification(_CamelModel):
    """
    送信 1回分の通知。送信のたびに購読情報から組み立て、保存はしない。
    """

    user_notification: UserNotification = Field(..., alias="userNotification")
    target: PushTarget

    @classmethod
    def for_subscription(
        cls,
        subscription: NotificationSubscription,
        title: str,
    ) -> "PushNotification":
        return cls(
            user_notification=UserNotification(title=title),
            target=PushTarget(user_id=subscription.user_id, intent=subscription.intent),
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class DeliveryResult(BaseModel):
    """
    ファンアウト全体の結果。部分成功は表現しない（失敗時は例外）。
    """

    sent_count: int = Field(..., ge=0, description="送信した通知の件数")
    message: str = Field(SUCCESS_MESSAGE, description="ユーザーに返す確認メッセージ")
