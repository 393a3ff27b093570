# backend/tests/test_auth_router.py

from fastapi.testclient import TestClient

from app.auth.config import get_account_service
from app.auth.service import AccountService
from app.auth.storage import InMemoryStorage
from app.main import create_app


def create_test_client() -> tuple[TestClient, AccountService]:
    app = create_app()
    accounts = AccountService(InMemoryStorage())
    app.dependency_overrides[get_account_service] = lambda: accounts
    return TestClient(app), accounts


def test_signup_login_me_logout_flow():
    client, _ = create_test_client()

    resp = client.post("/auth/signup", json={"email": "User@Example.com", "password": "pw"})
    assert resp.status_code == 201
    assert resp.json()["account"]["email"] == "user@example.com"

    resp = client.post("/auth/login", json={"email": "user@example.com", "password": "pw"})
    assert resp.status_code == 200
    token = resp.json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    resp = client.get("/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "user@example.com"

    resp = client.post("/auth/logout", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["revoked"] is True

    resp = client.get("/auth/me", headers=headers)
    assert resp.status_code == 401


def test_signup_duplicate_returns_400():
    client, accounts = create_test_client()
    accounts.signup("dup@example.com", "pw")

    resp = client.post("/auth/signup", json={"email": "dup@example.com", "password": "pw"})

    assert resp.status_code == 400
    assert "already registered" in resp.json()["detail"]


def test_login_wrong_password_returns_400():
    client, accounts = create_test_client()
    accounts.signup("a@example.com", "pw")

    resp = client.post("/auth/login", json={"email": "a@example.com", "password": "nope"})

    assert resp.status_code == 400


def test_me_without_token_returns_401():
    client, _ = create_test_client()

    assert client.get("/auth/me").status_code == 401
    assert client.post("/auth/logout").status_code == 401


def test_health():
    client, _ = create_test_client()

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
