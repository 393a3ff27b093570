"""
Supabase REST 連携モジュール（公式 SDK は使わない）。

- config: SUPABASE_URL / SUPABASE_ANON_KEY などの設定値
- client: 認証 API (auth/v1/user) と PostgREST (rest/v1) への HTTP クライアント
"""

from .client import (  # noqa: F401
    SupabaseAuthError,
    SupabaseClient,
    SupabaseClientError,
    SupabaseHTTPError,
)
from .config import SupabaseConfig, get_supabase_config  # noqa: F401
