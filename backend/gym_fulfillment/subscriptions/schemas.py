# backend/gym_fulfillment/subscriptions/schemas.py

"""
プッシュ通知の購読情報スキーマ。

※ user_id はプラットフォームが払い出す不透明なトークン。ログにそのまま出さないこと。
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# 通知から起動させるインテント名
NOTIFICATION_INTENT = "notification_trigger"

# 通知許可の結果が入るセッションパラメータ名
NOTIFICATION_SLOT_PARAM = f"NotificationsSlot_{NOTIFICATION_INTENT}"

# user params 上で購読リストを保持するキー
SUBSCRIPTIONS_PARAM = "notificationSubscriptions"


class PermissionStatus(str, Enum):
    """
    通知許可リクエストの結果。

    購読を記録するのは PERMISSION_GRANTED のときのみ。
    """

    PERMISSION_GRANTED = "PERMISSION_GRANTED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    ALREADY_GRANTED = "ALREADY_GRANTED"
    PERMISSION_STATUS_UNSPECIFIED = "PERMISSION_STATUS_UNSPECIFIED"

    @classmethod
    def parse(cls, raw: Optional[Any]) -> "PermissionStatus":
        """未知の値や None は PERMISSION_STATUS_UNSPECIFIED として扱う。"""
        try:
            return cls(raw)
        except ValueError:
            return cls.PERMISSION_STATUS_UNSPECIFIED

    @property
    def is_granted(self) -> bool:
        return self is PermissionStatus.PERMISSION_GRANTED


class NotificationSubscription(BaseModel):
    """
    1ユーザー分の通知購読。

    user_id は通知の送り先で、会話中のユーザーとは限らない。
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    intent: str = Field(..., description="通知タップ時に起動するインテント名")


class SessionState(BaseModel):
    """
    ユーザー単位のセッション状態。

    現状は購読リストのみ。追記のみで、個別削除は行わない。
    """

    model_config = ConfigDict(populate_by_name=True)

    notification_subscriptions: List[NotificationSubscription] = Field(
        default_factory=list,
        alias=SUBSCRIPTIONS_PARAM,
    )
