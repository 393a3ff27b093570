# backend/app/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /functions/v1/get-notion-page エンドポイントを公開する
- /auth/* （デモ用アカウント）エンドポイントを公開する
"""

from fastapi import FastAPI

from app.auth.router import router as auth_router
from app.dashboard.errors import DashboardError
from app.dashboard.router import dashboard_error_handler, router as dashboard_router
from app.utils.log import configure_logging


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - Notion ページ取得エンドポイント (/functions/v1/get-notion-page)
    - デモ認証エンドポイント (/auth/*)
    - ヘルスチェックエンドポイント (/health)
    """
    configure_logging()

    app = FastAPI(title="Notion Page Dashboard Backend")

    # ルーター登録
    app.include_router(dashboard_router)
    app.include_router(auth_router)

    app.add_exception_handler(DashboardError, dashboard_error_handler)

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
