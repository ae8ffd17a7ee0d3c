# backend/tests/test_notifications_service.py

import logging
from typing import List, Optional, Tuple

import pytest

from gym_fulfillment.notifications.client import PushHTTPError
from gym_fulfillment.notifications.schemas import PushNotification
from gym_fulfillment.notifications.service import (
    AuthError,
    DeliveryError,
    NotificationError,
    NotificationService,
)
from gym_fulfillment.subscriptions.schemas import NotificationSubscription


class DummyTokenClient:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls = 0

    async def get_access_token(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return "dummy-token"


class DummyProvider:
    def __init__(
        self,
        client: Optional[DummyTokenClient] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.client = client or DummyTokenClient()
        self.error = error
        self.calls = 0

    async def get_client(self) -> DummyTokenClient:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.client


class DummyPushClient:
    def __init__(self, reject_user_ids: Tuple[str, ...] = ()) -> None:
        self.sent: List[Tuple[str, PushNotification]] = []
        self.reject_user_ids = reject_user_ids

    async def send(self, access_token: str, notification: PushNotification) -> dict:
        self.sent.append((access_token, notification))
        if notification.target.user_id in self.reject_user_ids:
            raise PushHTTPError(status_code=500, body="boom")
        return {}


S1 = NotificationSubscription(user_id="u-1", intent="notification_trigger")
S2 = NotificationSubscription(user_id="u-2", intent="notification_trigger")


@pytest.mark.asyncio
async def test_empty_subscriptions_is_vacuous_success() -> None:
    provider = DummyProvider()
    push_client = DummyPushClient()
    service = NotificationService(provider, push_client)

    result = await service.notify_all_subscribers([])

    assert result.sent_count == 0
    assert result.message == "A notification has been sent to all subscribed users."
    # 認証も送信も行わない
    assert provider.calls == 0
    assert push_client.sent == []


@pytest.mark.asyncio
async def test_two_subscriptions_send_two_posts() -> None:
    push_client = DummyPushClient()
    service = NotificationService(DummyProvider(), push_client)

    result = await service.notify_all_subscribers([S1, S2])

    assert result.sent_count == 2
    assert result.message == "A notification has been sent to all subscribed users."

    assert len(push_client.sent) == 2
    payloads = sorted((n.to_payload() for _, n in push_client.sent), key=lambda p: p["target"]["userId"])
    assert payloads == [
        {
            "userNotification": {"title": "Test Notification from Action Gym"},
            "target": {"userId": "u-1", "intent": "notification_trigger"},
        },
        {
            "userNotification": {"title": "Test Notification from Action Gym"},
            "target": {"userId": "u-2", "intent": "notification_trigger"},
        },
    ]
    assert all(token == "dummy-token" for token, _ in push_client.sent)


@pytest.mark.asyncio
async def test_custom_title_is_used() -> None:
    push_client = DummyPushClient()
    service = NotificationService(DummyProvider(), push_client, title="Class canceled")

    await service.notify_all_subscribers([S1])

    assert push_client.sent[0][1].user_notification.title == "Class canceled"


@pytest.mark.asyncio
async def test_one_rejected_post_fails_whole_fanout(caplog) -> None:
    push_client = DummyPushClient(reject_user_ids=("u-2",))
    service = NotificationService(DummyProvider(), push_client)

    with caplog.at_level(logging.WARNING, logger="gym_fulfillment.notifications.service"):
        with pytest.raises(DeliveryError) as exc_info:
            await service.notify_all_subscribers([S1, S2])

    # 失敗があっても全件送信を試みる
    assert len(push_client.sent) == 2
    assert exc_info.value.failed_count == 1
    assert exc_info.value.total == 2
    assert isinstance(exc_info.value.__cause__, PushHTTPError)
    assert isinstance(exc_info.value, NotificationError)
    assert any(r.levelno == logging.WARNING for r in caplog.records)


@pytest.mark.asyncio
async def test_client_acquisition_failure_raises_auth_error() -> None:
    push_client = DummyPushClient()
    service = NotificationService(DummyProvider(error=RuntimeError("no adc")), push_client)

    with pytest.raises(AuthError) as exc_info:
        await service.notify_all_subscribers([S1])

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert push_client.sent == []


@pytest.mark.asyncio
async def test_token_failure_raises_auth_error() -> None:
    token_client = DummyTokenClient(error=ValueError("refresh rejected"))
    push_client = DummyPushClient()
    service = NotificationService(DummyProvider(client=token_client), push_client)

    with pytest.raises(AuthError):
        await service.notify_all_subscribers([S1, S2])

    assert token_client.calls == 1
    assert push_client.sent == []
