"""
認証まわりの設定値と依存オブジェクトの生成。
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from app.supabase_rest import SupabaseClient, get_supabase_config
from app.utils.config import get_env

from .service import AccountService
from .storage import InMemoryStorage, JsonFileStorage, KeyValueStorage
from .validators import CredentialValidator, LocalSessionValidator, SupabaseCredentialValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSettings:
    """
    デモ認証の設定値。

    storage_path が None の場合はプロセス内メモリに保存する（再起動で消える）。
    """

    storage_path: Optional[str] = None


def get_auth_settings() -> AuthSettings:
    """
    任意:
      - AUTH_STORAGE_PATH: アカウント / セッションを保存する JSON ファイル
    """
    return AuthSettings(storage_path=get_env("AUTH_STORAGE_PATH", required=False))


def build_storage(settings: AuthSettings) -> KeyValueStorage:
    if settings.storage_path:
        return JsonFileStorage(settings.storage_path)
    return InMemoryStorage()


@lru_cache()
def get_account_service() -> AccountService:
    """アプリ全体で共有する AccountService を返す。"""
    return AccountService(build_storage(get_auth_settings()))


@lru_cache()
def get_credential_validator() -> CredentialValidator:
    """
    ベアラートークンの検証器を返す。

    SUPABASE_URL が設定されていれば Supabase Auth、無ければデモのセッション検証。
    """
    supabase_config = get_supabase_config()
    if supabase_config is not None:
        logger.info("Using Supabase credential validator (%s).", supabase_config.url)
        return SupabaseCredentialValidator(SupabaseClient(supabase_config))

    logger.info("SUPABASE_URL is not set; using local session validator.")
    return LocalSessionValidator(get_account_service())
