"""
ベアラートークンの検証器。

- SupabaseCredentialValidator: Supabase の auth/v1/user にトークンを渡して検証
- LocalSessionValidator: デモ用 AccountService のセッションで検証
"""

import logging
from typing import Protocol

from app.supabase_rest import SupabaseAuthError, SupabaseClient, SupabaseClientError

from .schemas import AuthenticatedUser
from .service import AccountService, SessionNotFoundError

logger = logging.getLogger(__name__)


class CredentialError(Exception):
    """トークンから検証済みユーザーを得られなかった場合の例外。"""


class CredentialValidator(Protocol):
    def validate(self, token: str) -> AuthenticatedUser:  # pragma: no cover - Protocol
        ...


def parse_bearer_token(authorization: str | None) -> str:
    """
    Authorization ヘッダから "Bearer " の後ろのトークンを取り出す。

    :raises CredentialError: ヘッダが無い / 形式が違う / トークンが空
    """
    if not authorization:
        raise CredentialError("Missing Authorization header")

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise CredentialError("Authorization header must be a Bearer token")
    return token.strip()


class SupabaseCredentialValidator:
    """Supabase Auth のアクセストークン（JWT）を検証する。"""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    def validate(self, token: str) -> AuthenticatedUser:
        try:
            user = self._client.get_user(token)
        except SupabaseAuthError as exc:
            raise CredentialError(str(exc)) from exc
        except SupabaseClientError as exc:
            logger.error("Supabase auth call failed: %s", exc)
            raise CredentialError(f"Could not verify access token: {exc}") from exc

        email = user.get("email")
        if not isinstance(email, str) or not email:
            raise CredentialError("Verified user has no email address")

        return AuthenticatedUser(id=str(user["id"]), email=email)


class LocalSessionValidator:
    """AccountService が発行したセッショントークンを検証する。"""

    def __init__(self, accounts: AccountService) -> None:
        self._accounts = accounts

    def validate(self, token: str) -> AuthenticatedUser:
        try:
            account = self._accounts.get_session_account(token)
        except SessionNotFoundError as exc:
            raise CredentialError(str(exc)) from exc
        return AuthenticatedUser(id=account.id, email=account.email)
