"""
Supabase（認証 API / PostgREST）連携の設定値。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from app.utils.config import get_env, get_env_int


@dataclass(frozen=True)
class SupabaseConfig:
    """Supabase プロジェクトへの接続設定。"""

    url: str
    anon_key: str
    timeout_seconds: int = 10
    page_lookup_table: str = "user_notion_pages"


@lru_cache()
def get_supabase_config() -> Optional[SupabaseConfig]:
    """
    環境変数から Supabase 設定を読み込む。

    SUPABASE_URL が未設定の場合は None を返し、ローカル（デモ）構成で動かす。

    SUPABASE_URL を設定した場合の必須:
      - SUPABASE_ANON_KEY

    任意:
      - SUPABASE_TIMEOUT_SECONDS (デフォルト: 10)
      - PAGE_LOOKUP_TABLE        (デフォルト: user_notion_pages)
    """
    url = get_env("SUPABASE_URL", required=False)
    if url is None:
        return None

    return SupabaseConfig(
        url=url.rstrip("/"),
        anon_key=get_env("SUPABASE_ANON_KEY"),
        timeout_seconds=get_env_int("SUPABASE_TIMEOUT_SECONDS", default=10),
        page_lookup_table=get_env(
            "PAGE_LOOKUP_TABLE",
            default="user_notion_pages",
            required=False,
        ),
    )
