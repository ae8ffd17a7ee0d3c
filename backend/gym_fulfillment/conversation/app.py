# backend/gym_fulfillment/conversation/app.py

"""
Webhook ハンドラのディスパッチ層。

- Conversation: 1リクエスト分の会話状態（パラメータ・応答の蓄積）
- ConversationApp: ハンドラ名 → 関数 の登録と呼び出し
"""

from __future__ import annotations

import copy
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from .schemas import (
    Prompt,
    SessionUpdate,
    Simple,
    Suggestion,
    UserUpdate,
    WebhookRequest,
    WebhookResponse,
)

logger = logging.getLogger(__name__)

HandlerFunc = Callable[["Conversation"], Union[None, Awaitable[None]]]


class ConversationError(Exception):
    """会話ディスパッチ全般の基底例外。"""


class UnknownHandlerError(ConversationError):
    """登録されていないハンドラ名が指定された場合の例外。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"No handler registered for {name!r}")
        self.name = name


class Conversation:
    """
    1回の Webhook 呼び出しに対応する会話オブジェクト。

    session_params / user_params はリクエストのコピーで、ハンドラが書き換えた内容が
    そのままレスポンスに載る。
    """

    def __init__(self, request: WebhookRequest) -> None:
        self.request = request
        self.session_params: Dict[str, Any] = copy.deepcopy(request.session.params)
        self.user_params: Dict[str, Any] = copy.deepcopy(request.user.params)
        self._texts: List[str] = []
        self._suggestions: List[Suggestion] = []

    @property
    def handler_name(self) -> str:
        return self.request.handler.name

    @property
    def session_id(self) -> str:
        return self.request.session.id

    def intent_param(self, name: str) -> Optional[Any]:
        """
        インテントパラメータの resolved 値を返す。未指定なら None。
        """
        param = self.request.intent.params.get(name)
        if param is None:
            return None
        return param.resolved

    def add(self, *items: Union[str, Suggestion]) -> None:
        """
        応答に文章またはサジェストチップを追加する。
        """
        for item in items:
            if isinstance(item, Suggestion):
                self._suggestions.append(item)
            else:
                self._texts.append(str(item))

    @property
    def texts(self) -> List[str]:
        return list(self._texts)

    @property
    def suggestions(self) -> List[Suggestion]:
        return list(self._suggestions)

    def build_response(self) -> WebhookResponse:
        """
        蓄積した応答とパラメータから WebhookResponse を組み立てる。

        何も add() されていない場合は prompt を含めない。
        未設定のフィールドは exclude_unset でシリアライズ時に落とす前提。
        """
        fields: Dict[str, Any] = {
            "session": SessionUpdate(id=self.session_id, params=self.session_params),
            "user": UserUpdate(params=self.user_params),
        }

        if self._texts or self._suggestions:
            prompt_fields: Dict[str, Any] = {
                "override": False,
                "suggestions": list(self._suggestions),
            }
            if self._texts:
                joined = " ".join(self._texts)
                prompt_fields["first_simple"] = Simple(speech=joined, text=joined)
            fields["prompt"] = Prompt(**prompt_fields)

        return WebhookResponse(**fields)


class ConversationApp:
    """
    ハンドラ名ごとに処理関数を登録し、Webhook リクエストを振り分ける。

    ハンドラは同期関数でも async 関数でもよい。
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, HandlerFunc] = {}

    def handle(self, name: str) -> Callable[[HandlerFunc], HandlerFunc]:
        """
        ハンドラ登録用デコレータ。
        """

        def decorator(func: HandlerFunc) -> HandlerFunc:
            self._handlers[name] = func
            return func

        return decorator

    @property
    def handler_names(self) -> List[str]:
        return sorted(self._handlers)

    async def dispatch(self, request: WebhookRequest) -> WebhookResponse:
        """
        リクエストのハンドラ名に対応する処理を実行し、レスポンスを返す。

        :raises UnknownHandlerError: ハンドラが登録されていない場合。
        ハンドラ内の例外はそのまま呼び出し元へ伝播させる。
        """
        name = request.handler.name
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownHandlerError(name)

        logger.info("Dispatching webhook handler %s", name)
        conv = Conversation(request)
        result = handler(conv)
        if inspect.isawaitable(result):
            await result

        return conv.build_response()
