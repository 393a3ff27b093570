"""
デモ用アカウント管理サービス。

localStorage ベースだったログイン / サインアップを、注入可能な
KeyValueStorage の上に載せ替えたもの。

ストレージ上のキー:
- "users":    StoredAccount の配列
- "sessions": アクセストークン → AccountPublic の dict

NOTE: パスワードハッシュはデモ用の簡易実装（ソルトなし SHA-256）。
"""

import hashlib
import hmac
import logging
import secrets
import threading
import uuid
from typing import Dict, List, Optional

from app.pages.schemas import normalize_email

from .schemas import AccountPublic, StoredAccount
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

USERS_KEY = "users"
SESSIONS_KEY = "sessions"


class AccountError(Exception):
    """アカウント操作全般の基底例外。"""


class DuplicateEmailError(AccountError):
    """既に登録済みのメールアドレスでサインアップしようとした。"""


class InvalidCredentialsError(AccountError):
    """メールアドレスが未登録、またはパスワードが一致しない。"""


class SessionNotFoundError(AccountError):
    """アクセストークンに対応するセッションが存在しない。"""


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class AccountService:
    """
    アカウントとセッションを KeyValueStorage 上で管理するサービス。

    - signup: メールアドレスを正規化して登録（重複は拒否）
    - login: 照合に成功したらセッショントークンを発行
    - logout: セッショントークンを失効
    - get_session_account: トークンからアカウントを引く
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        # load → 変更 → save を 1 単位で直列化する（ストレージのロックは 1 操作分だけ）
        self._lock = threading.Lock()

    def _load_accounts(self) -> List[StoredAccount]:
        raw = self._storage.get(USERS_KEY) or []
        return [StoredAccount(**item) for item in raw]

    def _save_accounts(self, accounts: List[StoredAccount]) -> None:
        self._storage.set(USERS_KEY, [account.model_dump() for account in accounts])

    def _load_sessions(self) -> Dict[str, dict]:
        return dict(self._storage.get(SESSIONS_KEY) or {})

    def list_accounts(self) -> List[AccountPublic]:
        return [AccountPublic(id=a.id, email=a.email) for a in self._load_accounts()]

    def signup(self, email: str, password: str) -> AccountPublic:
        normalized = normalize_email(email)

        with self._lock:
            accounts = self._load_accounts()

            if any(account.email == normalized for account in accounts):
                raise DuplicateEmailError(
                    "This email is already registered. Please log in or use a different email."
                )

            account = StoredAccount(
                id=uuid.uuid4().hex,
                email=normalized,
                password_hash=hash_password(password),
            )
            accounts.append(account)
            self._save_accounts(accounts)

        logger.info("Created account %s.", account.id)
        return AccountPublic(id=account.id, email=account.email)

    def login(self, email: str, password: str) -> tuple[str, AccountPublic]:
        """
        ログインしてセッショントークンを発行する。

        :return: (access_token, AccountPublic)
        :raises InvalidCredentialsError: 未登録 or パスワード不一致
        """
        normalized = normalize_email(email)
        found = next(
            (account for account in self._load_accounts() if account.email == normalized),
            None,
        )

        if found is None:
            raise InvalidCredentialsError("No account found with this email.")
        if not hmac.compare_digest(found.password_hash, hash_password(password)):
            raise InvalidCredentialsError("Incorrect password. Please try again.")

        public = AccountPublic(id=found.id, email=found.email)
        token = secrets.token_urlsafe(32)

        with self._lock:
            sessions = self._load_sessions()
            sessions[token] = public.model_dump()
            self._storage.set(SESSIONS_KEY, sessions)

        logger.info("Account %s logged in.", found.id)
        return token, public

    def logout(self, token: str) -> bool:
        """セッションを失効させる。存在しなかった場合は False。"""
        with self._lock:
            sessions = self._load_sessions()
            removed = sessions.pop(token, None)
            if removed is None:
                return False

            self._storage.set(SESSIONS_KEY, sessions)
        logger.info("Account %s logged out.", removed.get("id"))
        return True

    def get_session_account(self, token: str) -> AccountPublic:
        data: Optional[dict] = self._load_sessions().get(token)
        if data is None:
            raise SessionNotFoundError("Session not found or expired.")
        return AccountPublic(**data)
