# backend/gym_fulfillment/notifications/credentials.py

"""
Actions API 用のアクセストークン取得。

- CredentialProvider: クライアントハンドルを返すインターフェース
- AccessTokenClient: Bearer トークンを返すインターフェース
- GoogleCredentialProvider: google-auth の Application Default Credentials 実装

google-auth の呼び出しはブロッキングなので asyncio.to_thread で逃がす。
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

import google.auth
from google.auth.credentials import Credentials
from google.auth.transport.requests import Request

logger = logging.getLogger(__name__)


class AccessTokenClient(Protocol):
    async def get_access_token(self) -> str:  # pragma: no cover - Protocol
        ...


class CredentialProvider(Protocol):
    """
    クライアントハンドルの提供元。

    get_client() は何度呼んでも同じハンドルを返すこと。
    """

    async def get_client(self) -> AccessTokenClient:  # pragma: no cover - Protocol
        ...


class GoogleAccessTokenClient:
    """
    google-auth の Credentials をラップし、有効なアクセストークンを返す。
    """

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    def _refresh_if_needed(self) -> str:
        if not self._credentials.valid:
            self._credentials.refresh(Request())
        token = self._credentials.token
        if not token:
            raise RuntimeError("Credentials returned an empty access token.")
        return token

    async def get_access_token(self) -> str:
        return await asyncio.to_thread(self._refresh_if_needed)


class GoogleCredentialProvider:
    """
    Application Default Credentials からクライアントを生成するプロバイダ。

    初回の get_client() でのみ google.auth.default() を呼び、以降は同じクライアントを返す。
    同時に初回呼び出しが来ても生成は1回だけ。
    """

    def __init__(self, scopes: Sequence[str]) -> None:
        self._scopes: List[str] = list(scopes)
        self._client: Optional[GoogleAccessTokenClient] = None
        self._lock = asyncio.Lock()

    @property
    def scopes(self) -> List[str]:
        return list(self._scopes)

    def _load_credentials(self) -> Credentials:
        credentials, project_id = google.auth.default(scopes=self._scopes)
        logger.info("Loaded application default credentials (project=%s).", project_id)
        return credentials

    async def get_client(self) -> GoogleAccessTokenClient:
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is None:
                credentials = await asyncio.to_thread(self._load_credentials)
                self._client = GoogleAccessTokenClient(credentials)
        return self._client
