"""
ユーザー識別子 → Notion ページ ID の解決サービス。
"""

import logging
from typing import Optional

from .schemas import PageLookupRecord, normalize_email
from .store import PageLookupStore

logger = logging.getLogger(__name__)


class PageNotFoundError(LookupError):
    """ユーザーに紐づく Notion ページが見つからない場合の例外。"""

    def __init__(self, email: str, page_id: Optional[str] = None) -> None:
        if page_id:
            message = f"Notion page {page_id} is not linked to user {email}"
        else:
            message = f"No Notion page found for user {email}"
        super().__init__(message)
        self.email = email
        self.page_id = page_id


class PageLookupService:
    """
    PageLookupStore を使って 1 件の Notion ページ ID を決定するサービス。

    複数件ヒットした場合は page_id の辞書順で先頭を採用する
    （ストアの返却順に依存しないようにするため）。
    page_id が指定された場合は、そのユーザーに紐づくものだけを許可する。
    """

    def __init__(self, store: PageLookupStore) -> None:
        self._store = store

    def resolve_record(self, email: str, page_id: Optional[str] = None) -> PageLookupRecord:
        records = sorted(self._store.find_by_email(email), key=lambda r: r.page_id)

        if not records:
            raise PageNotFoundError(email)

        if page_id is not None:
            for record in records:
                if record.page_id == page_id:
                    return record
            raise PageNotFoundError(email, page_id)

        if len(records) > 1:
            logger.warning(
                "User %s has %s linked pages; using %s.",
                normalize_email(email),
                len(records),
                records[0].page_id,
            )
        return records[0]

    def resolve(self, email: str, page_id: Optional[str] = None) -> str:
        """ユーザーに紐づく Notion ページ ID を返す。"""
        return self.resolve_record(email, page_id).page_id
