from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from g4g.modules.auth.service import AuthService, clear_auth_cache
from tests.conftest import auth


class _StubAuth:
    def __init__(self, error=None):
        self.calls = 0
        self.error = error

    def get_user(self, jwt):
        self.calls += 1
        if self.error:
            raise self.error
        if jwt != "good-token":
            return SimpleNamespace(user=None)
        return SimpleNamespace(user=SimpleNamespace(
            id="user-1",
            email="user-1@example.com",
            user_metadata={"full_name": "Pat"},
            app_metadata=None,
        ))


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


def test_get_current_user_is_cached():
    stub = _StubAuth()
    service = AuthService(SimpleNamespace(auth=stub))

    first = service.get_current_user("good-token")
    second = service.get_current_user("good-token")

    assert first == second
    assert first["id"] == "user-1"
    assert first["app_metadata"] == {}
    assert stub.calls == 1


def test_invalid_token_is_401():
    service = AuthService(SimpleNamespace(auth=_StubAuth()))
    with pytest.raises(HTTPException) as exc:
        service.get_current_user("bad-token")
    assert exc.value.status_code == 401


def test_auth_backend_error_is_401():
    service = AuthService(SimpleNamespace(auth=_StubAuth(error=RuntimeError("JWT expired"))))
    with pytest.raises(HTTPException) as exc:
        service.get_current_user("good-token")
    assert exc.value.status_code == 401
    assert exc.value.detail == "Invalid or expired token"


def test_auth_me_returns_role_and_permissions(client, make_profile):
    coach = make_profile(role="coach", tier=None)
    r = client.get("/api/v1/auth/me", headers=auth(coach))
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == coach["id"]
    assert body["role"] == "coach"
    assert "workouts:create" in body["permissions"]


def test_missing_profile_is_404(client):
    r = client.get("/api/v1/profiles/me", headers={"X-Test-User": "nobody"})
    assert r.status_code == 404


def test_unauthenticated_is_401(client):
    r = client.get("/api/v1/profiles/me")
    assert r.status_code == 401


def test_full_cache_evicts_expired_entries(monkeypatch):
    from g4g.config import settings
    from g4g.modules.auth import service as auth_service

    monkeypatch.setattr(settings, "auth_cache_max_size", 1)
    auth_service._AUTH_USER_CACHE["stale"] = ({"id": "old"}, 0.0)
    stub = _StubAuth()
    service = AuthService(SimpleNamespace(auth=stub))

    service.get_current_user("good-token")

    assert "stale" not in auth_service._AUTH_USER_CACHE
    assert len(auth_service._AUTH_USER_CACHE) == 1


def test_banned_user_is_rejected(client, make_profile):
    user = make_profile(banned=True)
    r = client.get("/api/v1/profiles/me", headers=auth(user))
    assert r.status_code == 403
    assert r.json()["detail"] == "Account suspended"
