# backend/gym_fulfillment/notifications/client.py

"""
Actions API（conversations:send）への HTTP クライアント。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .config import ActionsApiSettings, get_actions_api_settings
from .schemas import PushNotification


class PushClientError(Exception):
    """プッシュ送信クライアント全般の基底例外。"""


class PushHTTPError(PushClientError):
    """HTTP ステータスコードがエラーだった場合の例外。"""

    def __init__(self, status_code: int, body: Any | None = None) -> None:
        super().__init__(f"Actions API error: status_code={status_code}")
        self.status_code = status_code
        self.body = body


class PushConnectionError(PushClientError):
    """接続エラー・タイムアウト時の例外。"""


class ActionsPushClient:
    """
    Actions API へプッシュ通知を 1件ずつ POST するクライアント。

    transport はテストで httpx.MockTransport を差し込むためのもの。
    """

    def __init__(
        self,
        settings: ActionsApiSettings | None = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings or get_actions_api_settings()
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._settings.endpoint

    @property
    def timeout(self) -> Optional[int]:
        return self._settings.timeout_seconds

    @property
    def is_in_sandbox(self) -> bool:
        return self._settings.is_in_sandbox

    def _build_headers(self, access_token: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }

    def build_body(self, notification: PushNotification) -> Dict[str, Any]:
        """
        送信用のリクエストボディを構築する。
        """
        return {
            "customPushMessage": notification.to_payload(),
            "isInSandbox": self.is_in_sandbox,
        }

    async def send(self, access_token: str, notification: PushNotification) -> Dict[str, Any]:
        """
        通知 1件を Actions API に送信する。

        :raises PushHTTPError: Actions API が 4xx/5xx を返した場合。
        :raises PushConnectionError: 接続エラーやタイムアウト時。
        :return: Actions API からの JSON レスポンス（成功時）。
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    json=self.build_body(notification),
                    headers=self._build_headers(access_token),
                )
        except httpx.RequestError as exc:  # 接続エラー・タイムアウトなど
            raise PushConnectionError(str(exc)) from exc

        if response.status_code // 100 != 2:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise PushHTTPError(status_code=response.status_code, body=body)

        try:
            return response.json()
        except ValueError:
            # JSON でないレスポンスはそのままテキストで返す。
            return {"raw": response.text}
