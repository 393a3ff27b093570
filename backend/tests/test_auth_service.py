# backend/tests/test_auth_service.py

import threading
import time
from unittest.mock import MagicMock

import pytest

from app.auth.schemas import AccountPublic
from app.auth.service import (
    AccountService,
    DuplicateEmailError,
    InvalidCredentialsError,
    SessionNotFoundError,
)
from app.auth.storage import InMemoryStorage, JsonFileStorage
from app.auth.validators import (
    CredentialError,
    LocalSessionValidator,
    SupabaseCredentialValidator,
    parse_bearer_token,
)
from app.supabase_rest import SupabaseAuthError, SupabaseHTTPError


@pytest.fixture
def accounts() -> AccountService:
    return AccountService(InMemoryStorage())


def test_signup_normalizes_email_and_hides_password(accounts):
    account = accounts.signup("  New.User@Example.com ", "secret")

    assert account.email == "new.user@example.com"
    assert not hasattr(account, "password_hash")
    assert [a.email for a in accounts.list_accounts()] == ["new.user@example.com"]


def test_signup_rejects_duplicate_email(accounts):
    accounts.signup("dup@example.com", "secret")

    with pytest.raises(DuplicateEmailError):
        accounts.signup("DUP@example.com", "other")


def test_login_success_issues_session(accounts):
    created = accounts.signup("a@example.com", "pw")

    token, account = accounts.login("A@EXAMPLE.COM", "pw")

    assert token
    assert account == created
    assert accounts.get_session_account(token) == created


def test_login_unknown_email(accounts):
    with pytest.raises(InvalidCredentialsError, match="No account found"):
        accounts.login("ghost@example.com", "pw")


def test_login_wrong_password(accounts):
    accounts.signup("a@example.com", "pw")

    with pytest.raises(InvalidCredentialsError, match="Incorrect password"):
        accounts.login("a@example.com", "wrong")


def test_logout_revokes_session(accounts):
    accounts.signup("a@example.com", "pw")
    token, _ = accounts.login("a@example.com", "pw")

    assert accounts.logout(token) is True
    assert accounts.logout(token) is False
    with pytest.raises(SessionNotFoundError):
        accounts.get_session_account(token)


def test_json_file_storage_persists_between_instances(tmp_path):
    path = tmp_path / "auth" / "storage.json"

    first = AccountService(JsonFileStorage(path))
    first.signup("persist@example.com", "pw")
    token, _ = first.login("persist@example.com", "pw")

    second = AccountService(JsonFileStorage(path))
    assert second.get_session_account(token).email == "persist@example.com"
    assert JsonFileStorage(path).keys() == ["sessions", "users"]


def test_json_file_storage_delete(tmp_path):
    storage = JsonFileStorage(tmp_path / "kv.json")
    storage.set("k", {"v": 1})
    assert storage.get("k") == {"v": 1}

    storage.delete("k")
    storage.delete("missing")

    assert storage.get("k") is None
    assert storage.keys() == []


@pytest.mark.parametrize(
    "header",
    [None, "", "Basic abc", "Bearer", "Bearer    "],
)
def test_parse_bearer_token_rejects_invalid_headers(header):
    with pytest.raises(CredentialError):
        parse_bearer_token(header)


def test_parse_bearer_token():
    assert parse_bearer_token("Bearer abc.def") == "abc.def"
    assert parse_bearer_token("bearer xyz") == "xyz"


def test_local_session_validator(accounts):
    accounts.signup("a@example.com", "pw")
    token, account = accounts.login("a@example.com", "pw")
    validator = LocalSessionValidator(accounts)

    user = validator.validate(token)

    assert (user.id, user.email) == (account.id, "a@example.com")
    with pytest.raises(CredentialError):
        validator.validate("not-a-session")


def test_supabase_validator_success():
    client = MagicMock()
    client.get_user.return_value = {"id": "u1", "email": "a@example.com"}

    user = SupabaseCredentialValidator(client).validate("jwt")

    client.get_user.assert_called_once_with("jwt")
    assert user.email == "a@example.com"


@pytest.mark.parametrize(
    "side_effect, return_value",
    [
        (SupabaseAuthError("expired"), None),
        (SupabaseHTTPError(status_code=500), None),
        (None, {"id": "u1"}),
    ],
)
def test_supabase_validator_failures(side_effect, return_value):
    client = MagicMock()
    client.get_user.side_effect = side_effect
    client.get_user.return_value = return_value

    with pytest.raises(CredentialError):
        SupabaseCredentialValidator(client).validate("jwt")


def test_account_public_model_roundtrip():
    assert AccountPublic(id="1", email="a@example.com").model_dump() == {
        "id": "1",
        "email": "a@example.com",
    }


class SlowStorage(InMemoryStorage):
    """get のたびに少し待つストレージ（読み書きの間に他スレッドを割り込ませる）。"""

    def get(self, key):
        value = super().get(key)
        time.sleep(0.05)
        return value


def _run_concurrently(target, count: int = 2) -> None:
    threads = [threading.Thread(target=target) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def test_concurrent_logins_keep_every_session():
    accounts = AccountService(SlowStorage())
    accounts.signup("a@example.com", "pw")
    tokens = []

    _run_concurrently(lambda: tokens.append(accounts.login("a@example.com", "pw")[0]))

    assert len(tokens) == 2
    for token in tokens:
        assert accounts.get_session_account(token).email == "a@example.com"


def test_concurrent_signups_with_same_email_register_once():
    accounts = AccountService(SlowStorage())
    errors = []

    def signup():
        try:
            accounts.signup("dup@example.com", "pw")
        except DuplicateEmailError as exc:
            errors.append(exc)

    _run_concurrently(signup)

    assert len(errors) == 1
    assert [a.email for a in accounts.list_accounts()] == ["dup@example.com"]
