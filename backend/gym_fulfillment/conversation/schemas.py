# backend/gym_fulfillment/conversation/schemas.py

"""
会話プラットフォームの Webhook リクエスト／レスポンスのスキーマ定義。

プラットフォームが送ってくる JSON のうち、本サービスのハンドラが必要とする
フィールドのみをモデル化する。未知のフィールドは無視する。

JSON 上のキーは camelCase のため alias で対応付ける。
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---- リクエスト ----------------------------------------------------------


class HandlerInfo(_CamelModel):
    """呼び出し対象の Webhook ハンドラ名。"""

    name: str = Field(..., description="Actions 側で設定したハンドラ名（例: classes）")


class IntentParameterValue(_CamelModel):
    """
    インテントパラメータ 1件分。

    original はユーザーの発話そのまま、resolved はプラットフォームが正規化した値。
    """

    original: Optional[str] = None
    resolved: Any = None


class IntentInfo(_CamelModel):
    name: str = ""
    params: Dict[str, IntentParameterValue] = Field(default_factory=dict)
    query: Optional[str] = None


class SessionInfo(_CamelModel):
    id: str = ""
    params: Dict[str, Any] = Field(default_factory=dict)
    language_code: Optional[str] = Field(None, alias="languageCode")


class UserInfo(_CamelModel):
    locale: Optional[str] = None
    params: Dict[str, Any] = Field(
        default_factory=dict,
        description="ユーザー単位で永続化されるパラメータ（永続化はプラットフォーム側の責務）。",
    )


class WebhookRequest(_CamelModel):
    """
    /fulfillment のリクエストボディ。
    """

    handler: HandlerInfo
    intent: IntentInfo = Field(default_factory=IntentInfo)
    session: SessionInfo = Field(default_factory=SessionInfo)
    user: UserInfo = Field(default_factory=UserInfo)


# ---- レスポンス ----------------------------------------------------------


class Simple(_CamelModel):
    speech: str
    text: str


class Suggestion(_CamelModel):
    """サジェストチップ。ラベルのみ。"""

    title: str


class Prompt(_CamelModel):
    override: bool = False
    first_simple: Optional[Simple] = Field(None, alias="firstSimple")
    suggestions: List[Suggestion] = Field(default_factory=list)


class SessionUpdate(_CamelModel):
    id: str
    params: Dict[str, Any] = Field(default_factory=dict)


class UserUpdate(_CamelModel):
    params: Dict[str, Any] = Field(default_factory=dict)


class WebhookResponse(_CamelModel):
    """
    /fulfillment のレスポンスボディ。

    session / user の params はハンドラ実行後の値をそのまま返し、
    プラットフォーム側で保存される。
    """

    session: SessionUpdate
    user: UserUpdate
    prompt: Optional[Prompt] = None
