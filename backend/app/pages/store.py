"""
lookup record の保存先（ストア）実装。

- PageLookupStore: find_by_email だけを持つ最小インターフェース
- InMemoryPageLookupStore: テスト / ローカル用（JSON ファイルから初期データ投入可）
- SupabasePageLookupStore: PostgREST 経由で user_notion_pages テーブルを検索
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol

from app.supabase_rest import SupabaseClient

from .schemas import PageLookupRecord, normalize_email

logger = logging.getLogger(__name__)


class PageLookupStore(Protocol):
    """ユーザー識別子から lookup record を検索するストア。"""

    def find_by_email(self, email: str) -> List[PageLookupRecord]:  # pragma: no cover - Protocol
        ...


class InMemoryPageLookupStore:
    """
    プロセス内のリストに lookup record を保持するストア。

    照合は正規化済みメールアドレスの完全一致（= 大文字小文字を区別しない）。
    """

    def __init__(self, records: Iterable[PageLookupRecord] = ()) -> None:
        self._records: List[PageLookupRecord] = list(records)
        self._lock = threading.Lock()

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryPageLookupStore":
        """
        [{"email": ..., "pageID": ...}, ...] 形式の JSON から読み込む。

        "pageID"（Supabase テーブルの列名）と "page_id" のどちらも受け付ける。
        """
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"Page lookup file {path} must contain a JSON array.")

        records = [_record_from_row(row) for row in raw]
        logger.info("Loaded %s page lookup records from %s.", len(records), path)
        return cls(records)

    def add(self, email: str, page_id: str) -> PageLookupRecord:
        record = PageLookupRecord(email=email, page_id=page_id)
        with self._lock:
            self._records.append(record)
        return record

    def find_by_email(self, email: str) -> List[PageLookupRecord]:
        key = normalize_email(email)
        with self._lock:
            return [record for record in self._records if record.email == key]


class SupabasePageLookupStore:
    """
    Supabase の user_notion_pages テーブル（email / pageID 列）を検索するストア。

    ilike を使って大文字小文字を区別せずに照合する。
    """

    def __init__(self, client: SupabaseClient, table: str = "user_notion_pages") -> None:
        self._client = client
        self._table = table

    def find_by_email(self, email: str) -> List[PageLookupRecord]:
        # ilike のワイルドカード（% _ *）を無効化する
        pattern = normalize_email(email)
        for wildcard in ("%", "_", "*"):
            pattern = pattern.replace(wildcard, "\\" + wildcard)
        rows = self._client.select_rows(
            self._table,
            params={"select": "email,pageID", "email": f"ilike.{pattern}"},
        )
        records = []
        for row in rows:
            if not (row.get("pageID") or row.get("page_id")):
                logger.warning("Skipping %s row without pageID.", self._table)
                continue
            records.append(_record_from_row(row))
        return records


def _record_from_row(row: Dict[str, Any]) -> PageLookupRecord:
    page_id = row.get("pageID") or row.get("page_id") or ""
    return PageLookupRecord(email=row.get("email", ""), page_id=page_id)
