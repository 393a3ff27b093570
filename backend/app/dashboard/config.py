"""
ページ取得パイプラインの依存オブジェクトを組み立てる。
"""

import logging
from functools import lru_cache

from app.auth.config import get_credential_validator
from app.pages import InMemoryPageLookupStore, PageLookupService, SupabasePageLookupStore
from app.pages.store import PageLookupStore
from app.supabase_rest import SupabaseClient, get_supabase_config
from app.utils.config import EnvVarMissingError, get_env

from .errors import ConfigError
from .handler import NotionPageHandler

logger = logging.getLogger(__name__)


def build_page_lookup_store() -> PageLookupStore:
    """
    lookup ストアを選ぶ。

    1. SUPABASE_URL があれば Supabase の user_notion_pages テーブル
    2. PAGE_LOOKUP_PATH があればその JSON を読み込んだメモリストア
    3. どちらも無ければ空のメモリストア（全ユーザーが NotFound になる）
    """
    supabase_config = get_supabase_config()
    if supabase_config is not None:
        return SupabasePageLookupStore(
            SupabaseClient(supabase_config),
            table=supabase_config.page_lookup_table,
        )

    path = get_env("PAGE_LOOKUP_PATH", required=False)
    if path:
        return InMemoryPageLookupStore.from_json_file(path)

    logger.warning("No page lookup source configured; every lookup will be NotFound.")
    return InMemoryPageLookupStore()


@lru_cache()
def get_page_lookup_service() -> PageLookupService:
    return PageLookupService(build_page_lookup_store())


def get_page_handler() -> NotionPageHandler:
    """
    FastAPI の依存関数。設定不足や lookup ファイルの読み込み失敗は
    ConfigError として envelope に載せる。
    """
    try:
        return NotionPageHandler(
            validator=get_credential_validator(),
            lookup=get_page_lookup_service(),
        )
    except (EnvVarMissingError, OSError, ValueError) as exc:
        logger.error("Failed to build page handler: %s", exc)
        raise ConfigError(f"Server misconfigured: {exc}") from exc
