"""
ユーザー → Notion ページの対応表（lookup record）のスキーマ。
"""

from pydantic import BaseModel, Field, field_validator


def normalize_email(email: str) -> str:
    """照合用にメールアドレスを正規化する（前後空白除去 + 小文字化）。"""
    return email.strip().lower()


class PageLookupRecord(BaseModel):
    """1 ユーザーに紐づく Notion ページ 1 件。"""

    email: str = Field(..., description="ユーザー識別子（メールアドレス）")
    page_id: str = Field(..., min_length=1, description="Notion ページ ID")

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)
