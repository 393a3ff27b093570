"""
ダッシュボード用のページ取得エンドポイント。

- errors: 失敗種別（すべて 400 の error envelope になる）
- schemas: リクエストボディと envelope
- handler: 認証 → lookup → Notion 取得 → HTML 変換のオーケストレーション
- config: 依存オブジェクト（検証器 / lookup ストア）の組み立て
- router: /functions/v1/get-notion-page
"""

from .errors import (  # noqa: F401
    BadRequestError,
    ConfigError,
    DashboardError,
    ErrorKind,
    FetchFailedError,
    NotFoundError,
    UnauthorizedError,
)
from .handler import NotionPageHandler  # noqa: F401
