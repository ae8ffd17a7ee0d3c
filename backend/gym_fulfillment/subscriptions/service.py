# backend/gym_fulfillment/subscriptions/service.py

"""
通知購読の記録処理。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple, Union

from .schemas import (
    NOTIFICATION_INTENT,
    NotificationSubscription,
    PermissionStatus,
)
from .store import SessionStore

logger = logging.getLogger(__name__)


class SubscriptionError(Exception):
    """購読記録全般の基底例外。"""


class MissingUpdateUserIdError(SubscriptionError):
    """通知が許可されたのに updateUserId が渡されなかった場合の例外。"""

    def __init__(self) -> None:
        super().__init__("Notification permission was granted without an updateUserId.")


def parse_notification_slot(
    slot: Optional[Mapping[str, Any]],
) -> Tuple[PermissionStatus, Optional[str]]:
    """
    NotificationsSlot_* セッションパラメータから (許可状態, updateUserId) を取り出す。

    スロット自体が無い場合は未許可扱い。
    """
    if not slot:
        return PermissionStatus.PERMISSION_STATUS_UNSPECIFIED, None

    status = PermissionStatus.parse(slot.get("permissionStatus"))
    additional = slot.get("additionalUserData") or {}
    return status, additional.get("updateUserId")


def record_subscription(
    store: SessionStore,
    user_key: str,
    permission_status: Union[PermissionStatus, str, None],
    update_user_id: Optional[str],
    intent_name: str = NOTIFICATION_INTENT,
) -> Optional[NotificationSubscription]:
    """
    通知が許可されていれば、ユーザーの購読リストに 1件追記する。

    :return: 追加した NotificationSubscription。未許可なら None（ストアは変更しない）。
    :raises MissingUpdateUserIdError: 許可済みなのに update_user_id が空の場合。
    """
    if not isinstance(permission_status, PermissionStatus):
        permission_status = PermissionStatus.parse(permission_status)

    if not permission_status.is_granted:
        logger.info("Notification permission not granted (%s); nothing recorded.", permission_status.value)
        return None

    if not update_user_id:
        raise MissingUpdateUserIdError()

    subscription = NotificationSubscription(user_id=update_user_id, intent=intent_name)

    state = store.get(user_key)
    state.notification_subscriptions.append(subscription)
    store.put(user_key, state)

    logger.info(
        "Recorded notification subscription for intent %s (total=%d).",
        intent_name,
        len(state.notification_subscriptions),
    )
    return subscription
