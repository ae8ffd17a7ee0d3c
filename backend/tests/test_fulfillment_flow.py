# backend/tests/test_fulfillment_flow.py

"""
購読 → 休講通知 の一連の流れを Webhook 経由で確認する。

プラットフォームが user params を保存して次のリクエストに載せる動きを、
レスポンスの user.params を次のリクエストに引き回すことで再現する。
"""

import json

import httpx
from fastapi.testclient import TestClient

from gym_fulfillment.fulfillment.handlers import build_conversation_app
from gym_fulfillment.fulfillment.state import get_conversation_app
from gym_fulfillment.main import create_app
from gym_fulfillment.notifications.client import ActionsPushClient
from gym_fulfillment.notifications.config import ActionsApiSettings
from gym_fulfillment.notifications.service import NotificationService


class StaticTokenClient:
    async def get_access_token(self) -> str:
        return "flow-token"


class StaticProvider:
    async def get_client(self) -> StaticTokenClient:
        return StaticTokenClient()


def _subscribe_body(update_user_id: str, user_params: dict) -> dict:
    return {
        "handler": {"name": "subscribe_to_notifications"},
        "session": {
            "id": "session-flow",
            "params": {
                "NotificationsSlot_notification_trigger": {
                    "permissionStatus": "PERMISSION_GRANTED",
                    "additionalUserData": {"updateUserId": update_user_id},
                }
            },
        },
        "user": {"params": user_params},
    }


def test_subscribe_twice_then_cancel_class_notifies_both() -> None:
    sent_payloads = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent_payloads.append(json.loads(request.content))
        return httpx.Response(200, json={})

    settings = ActionsApiSettings(endpoint="https://push.example.com/send")
    service = NotificationService(
        StaticProvider(),
        ActionsPushClient(settings, transport=httpx.MockTransport(handler)),
    )
    app = create_app()
    conversation_app = build_conversation_app(notification_service_factory=lambda: service)
    app.dependency_overrides[get_conversation_app] = lambda: conversation_app
    client = TestClient(app)

    user_params: dict = {}
    for update_user_id in ("update-a", "update-b"):
        resp = client.post("/fulfillment", json=_subscribe_body(update_user_id, user_params))
        assert resp.status_code == 200
        user_params = resp.json()["user"]["params"]

    assert [s["userId"] for s in user_params["notificationSubscriptions"]] == ["update-a", "update-b"]

    resp = client.post(
        "/fulfillment",
        json={
            "handler": {"name": "cancel_class"},
            "session": {"id": "session-flow", "params": {}},
            "user": {"params": user_params},
        },
    )

    assert resp.status_code == 200
    targets = sorted(p["customPushMessage"]["target"]["userId"] for p in sent_payloads)
    assert targets == ["update-a", "update-b"]
    assert all(p["isInSandbox"] is True for p in sent_payloads)
