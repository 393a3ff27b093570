# backend/tests/test_supabase_client.py

import json

import httpx
import pytest

from app.supabase_rest import (
    SupabaseAuthError,
    SupabaseClient,
    SupabaseClientError,
    SupabaseConfig,
    SupabaseHTTPError,
    get_supabase_config,
)


def make_client() -> SupabaseClient:
    return SupabaseClient(SupabaseConfig(url="https://proj.supabase.co", anon_key="anon"))


def test_get_supabase_config_is_none_without_url(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    assert get_supabase_config() is None


def test_get_supabase_config_reads_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co/")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")

    config = get_supabase_config()

    assert config.url == "https://proj.supabase.co"
    assert config.anon_key == "anon"
    assert config.page_lookup_table == "user_notion_pages"


def test_supabase_http_error_is_client_error():
    assert issubclass(SupabaseHTTPError, SupabaseClientError)
    assert issubclass(SupabaseAuthError, SupabaseClientError)


def test_get_user_success(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return httpx.Response(
            status_code=200,
            content=json.dumps({"id": "u1", "email": "a@example.com"}).encode("utf-8"),
        )

    monkeypatch.setattr(httpx, "get", fake_get)

    user = make_client().get_user("user-jwt")

    assert user["email"] == "a@example.com"
    url, kwargs = calls[0]
    assert url == "https://proj.supabase.co/auth/v1/user"
    assert kwargs["headers"]["Authorization"] == "Bearer user-jwt"
    assert kwargs["headers"]["apikey"] == "anon"


def test_get_user_401(monkeypatch):
    monkeypatch.setattr(httpx, "get", lambda *a, **k: httpx.Response(status_code=401, content=b"{}"))

    with pytest.raises(SupabaseAuthError):
        make_client().get_user("expired")


def test_get_user_500(monkeypatch):
    monkeypatch.setattr(httpx, "get", lambda *a, **k: httpx.Response(status_code=500, content=b"x"))

    with pytest.raises(SupabaseHTTPError) as exc_info:
        make_client().get_user("token")
    assert exc_info.value.status_code == 500


def test_select_rows_uses_anon_key(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return httpx.Response(status_code=200, content=b'[{"email": "a@example.com", "pageID": "p"}]')

    monkeypatch.setattr(httpx, "get", fake_get)

    rows = make_client().select_rows("user_notion_pages", {"email": "ilike.a@example.com"})

    assert rows == [{"email": "a@example.com", "pageID": "p"}]
    url, kwargs = calls[0]
    assert url == "https://proj.supabase.co/rest/v1/user_notion_pages"
    assert kwargs["headers"]["Authorization"] == "Bearer anon"
    assert kwargs["params"] == {"email": "ilike.a@example.com"}


def test_select_rows_rejects_non_list(monkeypatch):
    monkeypatch.setattr(httpx, "get", lambda *a, **k: httpx.Response(status_code=200, content=b"{}"))

    with pytest.raises(SupabaseClientError):
        make_client().select_rows("user_notion_pages", {})


def test_network_error_is_wrapped(monkeypatch):
    def fake_get(*args, **kwargs):
        raise httpx.RequestError("network error", request=None)

    monkeypatch.setattr(httpx, "get", fake_get)

    with pytest.raises(SupabaseClientError):
        make_client().select_rows("user_notion_pages", {})
