# backend/gym_fulfillment/subscriptions/store.py

"""
ユーザー単位のセッション状態を読み書きするストア。

- SessionStore: get / put の最小インターフェース
- InMemorySessionStore: プロセス内 dict に保持する実装（ローカル実行・テスト用）
- ConversationSessionStore: Webhook の user params を読み書きする実装

永続化そのものは会話プラットフォーム側の責務で、本番でも DB は持たない。
"""

from __future__ import annotations

from typing import Dict, Protocol

from gym_fulfillment.conversation.app import Conversation

from .schemas import SUBSCRIPTIONS_PARAM, SessionState


class SessionStore(Protocol):
    """
    セッション状態ストアのインターフェース。

    未登録のユーザーに対する get() は空の SessionState を返すこと。
    """

    def get(self, user_key: str) -> SessionState:  # pragma: no cover - Protocol
        ...

    def put(self, user_key: str, state: SessionState) -> None:  # pragma: no cover - Protocol
        ...


class InMemorySessionStore:
    """
    dict ベースのストア。

    get / put ともにコピーを受け渡すので、呼び出し元の変更は put するまで反映されない。
    """

    def __init__(self) -> None:
        self._states: Dict[str, SessionState] = {}

    def get(self, user_key: str) -> SessionState:
        state = self._states.get(user_key)
        if state is None:
            return SessionState()
        return state.model_copy(deep=True)

    def put(self, user_key: str, state: SessionState) -> None:
        self._states[user_key] = state.model_copy(deep=True)


class ConversationSessionStore:
    """
    Conversation.user_params を背後に持つストア。

    1リクエスト分のユーザーしか扱わないため、他のキーを渡された場合は KeyError。
    """

    def __init__(self, conversation: Conversation) -> None:
        self._conv = conversation

    @property
    def user_key(self) -> str:
        return self._conv.session_id

    def _check_key(self, user_key: str) -> None:
        if user_key != self.user_key:
            raise KeyError(user_key)

    def get(self, user_key: str) -> SessionState:
        self._check_key(user_key)
        raw = self._conv.user_params.get(SUBSCRIPTIONS_PARAM) or []
        return SessionState.model_validate({SUBSCRIPTIONS_PARAM: raw})

    def put(self, user_key: str, state: SessionState) -> None:
        self._check_key(user_key)
        self._conv.user_params[SUBSCRIPTIONS_PARAM] = [
            s.model_dump(by_alias=True) for s in state.notification_subscriptions
        ]
