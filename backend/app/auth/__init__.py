"""
認証モジュール。

- storage: localStorage 相当の KeyValueStorage（メモリ / JSON ファイル）
- service: デモ用アカウント管理（signup / login / logout）
- validators: ベアラートークンの検証器（Supabase / ローカルセッション）
- config: 設定値と検証器の選択
- router: /auth/* エンドポイント
"""

from .schemas import AuthenticatedUser  # noqa: F401
from .service import AccountService  # noqa: F401
from .validators import (  # noqa: F401
    CredentialError,
    CredentialValidator,
    LocalSessionValidator,
    SupabaseCredentialValidator,
    parse_bearer_token,
)
