# backend/gym_fulfillment/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /fulfillment エンドポイント（会話プラットフォームの Webhook）を公開する
- /health エンドポイントを公開する
"""

from fastapi import FastAPI

from gym_fulfillment.fulfillment.router import router as fulfillment_router


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - Webhook フルフィルメントエンドポイント (/fulfillment)
    - ヘルスチェックエンドポイント (/health)
    """
    app = FastAPI(title="Action Gym Fulfillment")

    # ルーター登録
    app.include_router(fulfillment_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
