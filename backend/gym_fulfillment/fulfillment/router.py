# backend/gym_fulfillment/fulfillment/router.py
"""
会話プラットフォームからの Webhook を受けるルーター定義。

- /fulfillment
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from gym_fulfillment.conversation import (
    ConversationApp,
    UnknownHandlerError,
    WebhookRequest,
    WebhookResponse,
)
from gym_fulfillment.notifications.service import NotificationError
from gym_fulfillment.schedule.service import ScheduleError
from gym_fulfillment.subscriptions.service import SubscriptionError

from .state import get_conversation_app

logger = logging.getLogger(__name__)

router = APIRouter(tags=["fulfillment"])


@router.post(
    "/fulfillment",
    response_model=WebhookResponse,
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    summary="会話プラットフォームの Webhook フルフィルメント",
)
async def fulfill(
    body: WebhookRequest,
    conversation_app: ConversationApp = Depends(get_conversation_app),
) -> WebhookResponse:
    """
    ハンドラ名に応じて処理を振り分け、プロンプトと更新後のパラメータを返すエンドポイント。

    - 未登録のハンドラ → 404 Not Found
    - 曜日名・通知スロットの不整合 → 400 Bad Request
    - 通知送信の失敗・想定外の内部エラー → 500 Internal Server Error
    """
    try:
        return await conversation_app.dispatch(body)
    except UnknownHandlerError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except (ScheduleError, SubscriptionError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except NotificationError as exc:
        logger.error("Notification fan-out failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send notifications.",
        ) from exc
    except Exception as exc:  # noqa: BLE001
        # 予期しない例外は 500 としてプラットフォームに返す（詳細はログ側で確認）
        logger.exception("Unexpected error in handler %s", body.handler.name)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while handling the webhook.",
        ) from exc
