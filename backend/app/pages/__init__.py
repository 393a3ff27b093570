"""
ユーザーと Notion ページの対応表（lookup）モジュール。

- schemas: PageLookupRecord
- store: InMemory / Supabase のストア実装
- service: PageLookupService（1 件に決定するルール）
"""

from .schemas import PageLookupRecord, normalize_email  # noqa: F401
from .service import PageLookupService, PageNotFoundError  # noqa: F401
from .store import (  # noqa: F401
    InMemoryPageLookupStore,
    PageLookupStore,
    SupabasePageLookupStore,
)
