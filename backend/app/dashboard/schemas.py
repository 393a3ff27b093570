"""
ページ取得エンドポイントのリクエスト / レスポンス（envelope）定義。
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PageRequest(BaseModel):
    """
    リクエストボディ（任意）。

    pageId を省略した場合は、ログインユーザーに紐づくページを lookup で決める。
    """

    model_config = ConfigDict(extra="ignore")

    page_id: Optional[str] = Field(None, alias="pageId", description="表示したい Notion ページ ID")


class HtmlEnvelope(BaseModel):
    """成功時のレスポンス。"""

    html: str


class ErrorEnvelope(BaseModel):
    """失敗時のレスポンス（失敗種別に関係なく 400）。"""

    error: str
