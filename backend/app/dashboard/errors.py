"""
/functions/v1/get-notion-page の失敗種別。

どの種別もクライアントには 400 + {"error": message} で返す。
種別（kind）はログでだけ区別する。
"""

from enum import Enum


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    FETCH_FAILED = "fetch_failed"
    CONFIG = "config"


class DashboardError(Exception):
    """ページ取得パイプラインの基底例外。"""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthorizedError(DashboardError):
    """トークンが無い / 無効 / ユーザーを特定できない。"""

    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(DashboardError):
    """ユーザーに紐づく Notion ページが無い。"""

    kind = ErrorKind.NOT_FOUND


class BadRequestError(DashboardError):
    """リクエストボディが読めない、または pageId が不正。"""

    kind = ErrorKind.BAD_REQUEST


class FetchFailedError(DashboardError):
    """Notion API の呼び出し失敗（HTTP エラー・不正な JSON を含む）。"""

    kind = ErrorKind.FETCH_FAILED


class ConfigError(DashboardError):
    """Notion API キーなど、必須設定が欠けている。"""

    kind = ErrorKind.CONFIG
