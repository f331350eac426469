"""Session gate and identity provider client tests."""

from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from src.auth.client import AuthClient
from src.daybook.exceptions import AuthError, UpstreamError
from src.server.app import create_app
from src.server.dependencies import clear_caches

COOKIE = "daybook-access-token"
USER = {"id": "user-1", "email": "me@example.com"}


def fake_response(status_code: int, payload: dict) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


class FakeProvider:
    """Stands in for requests.request against the GoTrue API."""

    def __init__(self):
        self.calls = []

    def __call__(self, method, url, headers=None, json=None, params=None, timeout=None):
        self.calls.append((method, url, headers, json, params))
        if url.endswith("/token"):
            if json["password"] == "secret":
                return fake_response(
                    200, {"access_token": "good-token", "expires_in": 3600, "user": USER}
                )
            return fake_response(400, {"error_description": "Invalid login credentials"})
        if url.endswith("/signup"):
            return fake_response(200, {"id": "user-2", "email": json["email"]})
        if url.endswith("/user"):
            if headers.get("Authorization") == "Bearer good-token":
                return fake_response(200, USER)
            return fake_response(401, {"msg": "invalid JWT"})
        if url.endswith("/logout"):
            return fake_response(204, {})
        raise AssertionError(f"unexpected call {method} {url}")


@pytest.fixture
def provider(monkeypatch) -> FakeProvider:
    fake = FakeProvider()
    monkeypatch.setattr("src.auth.client.requests.request", fake)
    return fake


@pytest.fixture
def client(tmp_path, monkeypatch, provider) -> TestClient:
    config_path = tmp_path / "app_config.yaml"
    config_path.write_text(
        "\n".join(
            [
                "auth:",
                "  enabled: true",
                '  supabase_url: "https://auth.example.test"',
                '  supabase_anon_key: "anon-key"',
                f'  cookie_name: "{COOKIE}"',
                "log:",
                f'  file: "{tmp_path / "daybook.log"}"',
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("DAYBOOK_CONFIG", str(config_path))
    monkeypatch.setenv("DAYBOOK_DB_PATH", str(tmp_path / "auth.db"))
    clear_caches()
    yield TestClient(create_app())
    clear_caches()


def test_root_redirects_without_session(client):
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/auth"


def test_root_redirects_with_rejected_token(client):
    client.cookies.set(COOKIE, "expired")
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code == 303


def test_root_served_with_valid_session(client, provider):
    client.cookies.set(COOKIE, "good-token")
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code == 200
    assert "Journal Entry" in resp.text
    method, url, headers, _, _ = provider.calls[-1]
    assert (method, url) == ("GET", "https://auth.example.test/auth/v1/user")
    assert headers["apikey"] == "anon-key"


def test_only_root_is_gated(client):
    assert client.get("/auth").status_code == 200
    assert client.get("/entries").status_code == 200
    assert client.get("/health").status_code == 200


def test_login_sets_session_cookie(client):
    resp = client.post("/auth/login", json={"email": "me@example.com", "password": "secret"})

    assert resp.status_code == 200
    assert resp.json() == {"user": USER}
    assert COOKIE in resp.headers["set-cookie"]
    assert "good-token" in resp.headers["set-cookie"]
    assert client.get("/", follow_redirects=False).status_code == 200


def test_login_failure_message_is_surfaced(client):
    resp = client.post("/auth/login", json={"email": "me@example.com", "password": "wrong"})

    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid login credentials"}


def test_signup_pending_confirmation(client):
    resp = client.post("/auth/signup", json={"email": "new@example.com", "password": "pw"})

    assert resp.status_code == 401
    assert "confirm" in resp.json()["error"]


def test_logout_clears_cookie(client, provider):
    client.cookies.set(COOKIE, "good-token")
    resp = client.post("/auth/logout")

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert provider.calls[-1][0:2] == ("POST", "https://auth.example.test/auth/v1/logout")
    assert client.get("/", follow_redirects=False).status_code == 303


def test_auth_client_unreachable(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.exceptions.ConnectionError("no route to host")

    monkeypatch.setattr("src.auth.client.requests.request", boom)
    with pytest.raises(UpstreamError):
        AuthClient("https://auth.example.test/", "anon").get_user("token")


def test_auth_client_rejects_invalid_token(provider):
    with pytest.raises(AuthError, match="invalid JWT"):
        AuthClient("https://auth.example.test", "anon").get_user("bad")
