# backend/gym_fulfillment/notifications/service.py

"""
購読中の全ユーザーにプッシュ通知を送るファンアウト処理。

- アクセストークンの取得（CredentialProvider 経由）
- 購読ごとの PushNotification 生成と並行送信
- 全件成功 / 1件でも失敗 の二択で結果を返す（部分成功・リトライはなし）
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Protocol, Sequence

from gym_fulfillment.subscriptions.schemas import NotificationSubscription

from .config import DEFAULT_NOTIFICATION_TITLE
from .credentials import CredentialProvider
from .schemas import DeliveryResult, PushNotification

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """通知ファンアウト全般の基底例外。"""


class AuthError(NotificationError):
    """クライアントまたはアクセストークンの取得に失敗した場合の例外。"""


class DeliveryError(NotificationError):
    """
    1件以上の通知送信に失敗した場合の例外。

    __cause__ には入力順で最初に失敗した送信の例外が入る。
    """

    def __init__(self, failed_count: int, total: int, cause: BaseException) -> None:
        super().__init__(
            f"Error when sending notifications: {failed_count}/{total} failed: {cause}"
        )
        self.failed_count = failed_count
        self.total = total


class PushSender(Protocol):
    async def send(self, access_token: str, notification: PushNotification) -> Any:  # pragma: no cover - Protocol
        ...


class NotificationService:
    """
    通知ファンアウトのサービス層。

    credential_provider はプロセス全体で1つのクライアントをキャッシュしている前提で、
    このサービスのインスタンスも共有して使う（factory.get_notification_service）。
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        push_client: PushSender,
        *,
        title: str = DEFAULT_NOTIFICATION_TITLE,
    ) -> None:
        self._credential_provider = credential_provider
        self._push_client = push_client
        self._title = title

    async def _get_access_token(self) -> str:
        try:
            client = await self._credential_provider.get_client()
        except Exception as exc:  # noqa: BLE001
            raise AuthError(f"Auth error: failed to acquire client: {exc}") from exc

        try:
            return await client.get_access_token()
        except Exception as exc:  # noqa: BLE001
            raise AuthError(f"Auth error: {exc}") from exc

    def build_notifications(
        self,
        subscriptions: Sequence[NotificationSubscription],
    ) -> List[PushNotification]:
        return [PushNotification.for_subscription(s, self._title) for s in subscriptions]

    async def notify_all_subscribers(
        self,
        subscriptions: Sequence[NotificationSubscription],
    ) -> DeliveryResult:
        """
        全購読者に通知を送る。

        購読が0件なら認証も送信も行わずに成功を返す。

        :raises AuthError: トークン取得に失敗した場合。
        :raises DeliveryError: 1件でも送信に失敗した場合（全件の完了を待ってから送出）。
        """
        if not subscriptions:
            logger.info("No notification subscriptions; nothing to send.")
            return DeliveryResult(sent_count=0)

        access_token = await self._get_access_token()
        notifications = self.build_notifications(subscriptions)

        logger.info("Sending %d push notification(s).", len(notifications))
        results = await asyncio.gather(
            *(self._push_client.send(access_token, n) for n in notifications),
            return_exceptions=True,
        )

        failures: List[BaseException] = []
        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                logger.warning("Push notification #%d failed: %s", index, result)
                failures.append(result)

        if failures:
            raise DeliveryError(
                failed_count=len(failures),
                total=len(notifications),
                cause=failures[0],
            ) from failures[0]

        logger.info("All %d push notification(s) sent.", len(notifications))
        return DeliveryResult(sent_count=len(notifications))

