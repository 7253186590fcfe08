from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from relocation.app import app
from relocation.auth.config import AuthConfig
from relocation.auth.policy import AdminPolicy, get_admin_policy
from relocation.auth.users import authenticate, register_user, remove_user

client = TestClient(app)


def _login_user(c):
    c.post("/auth/login", json={"email": "user@example.com", "password": "user123"})


def _login_admin(c):
    c.post("/auth/login", json={"email": "admin@example.com", "password": "admin123"})


# ── Login / Logout ───────────────────────────────────────────────────────


def test_login_success_user():
    resp = client.post("/auth/login", json={"email": "user@example.com", "password": "user123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["user"] == {"id": "u-0001", "email": "user@example.com", "is_admin": False}


def test_login_success_admin_carries_flag():
    c = TestClient(app)
    resp = c.post("/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert resp.status_code == 200
    assert resp.json()["user"] == {"id": "u-0002", "email": "admin@example.com", "is_admin": True}
    assert c.get("/auth/me").json() == resp.json()["user"]


def test_login_flag_follows_injected_policy():
    app.dependency_overrides[get_admin_policy] = lambda: AdminPolicy(frozenset({"user@example.com"}))
    try:
        c = TestClient(app)
        resp = c.post("/auth/login", json={"email": "user@example.com", "password": "user123"})
    finally:
        app.dependency_overrides.pop(get_admin_policy, None)
    assert resp.json()["user"]["is_admin"] is True


def test_login_email_is_case_insensitive():
    resp = client.post("/auth/login", json={"email": "User@Example.com", "password": "user123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "user@example.com"


def test_login_wrong_password():
    resp = client.post("/auth/login", json={"email": "user@example.com", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unknown_user():
    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 401


def test_auth_me_reports_admin_flag():
    c = TestClient(app)
    _login_user(c)
    assert c.get("/auth/me").json()["is_admin"] is False
    _login_admin(c)
    assert c.get("/auth/me").json()["is_admin"] is True


def test_auth_me_not_logged_in():
    c = TestClient(app)
    assert c.get("/auth/me").status_code == 401


def test_logout():
    _login_user(client)
    resp = client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["status"] == "logged_out"
    assert client.get("/auth/me").status_code == 401


# ── Admin policy ─────────────────────────────────────────────────────────


def test_policy_from_config():
    policy = AdminPolicy.from_config(AuthConfig(admin_emails=("Boss@Example.com",)))
    assert policy.is_admin("boss@example.com")
    assert policy.is_admin(" BOSS@example.com ")
    assert not policy.is_admin("user@example.com")
    assert not policy.is_admin(None)
    assert not policy.is_admin("")


def test_analytics_requires_admin():
    c = TestClient(app)
    _login_user(c)
    assert c.get("/analytics").status_code == 403


def test_analytics_requires_login():
    c = TestClient(app)
    assert c.get("/analytics").status_code == 401


def test_analytics_allowed_for_admin():
    c = TestClient(app)
    _login_admin(c)
    assert c.get("/analytics").status_code == 200


def test_vibes_calculate_requires_admin():
    c = TestClient(app)
    _login_user(c)
    resp = c.post("/vibes/calculate", json={"area_id": "nanokamachi"})
    assert resp.status_code == 403


def test_injected_policy_controls_admin_access():
    app.dependency_overrides[get_admin_policy] = lambda: AdminPolicy(frozenset({"user@example.com"}))
    try:
        c = TestClient(app)
        _login_user(c)
        assert c.get("/analytics").status_code == 200
        _login_admin(c)
        assert c.get("/analytics").status_code == 403
    finally:
        app.dependency_overrides.pop(get_admin_policy, None)


# ── Public endpoints stay public ─────────────────────────────────────────


def test_health_is_public():
    c = TestClient(app)
    assert c.get("/health").status_code == 200


def test_vibe_map_is_public():
    c = TestClient(app)
    assert c.get("/vibes/areas").status_code == 200


# ── Account store ────────────────────────────────────────────────────────


def test_registered_user_can_log_in():
    user = register_user("u-0100", " New@Example.com ", "s3cret")
    try:
        assert user == {"id": "u-0100", "email": "new@example.com"}
        assert authenticate("new@example.com", "s3cret") == user
        assert authenticate("new@example.com", "wrong") is None
    finally:
        remove_user("new@example.com")
    assert authenticate("new@example.com", "s3cret") is None


def test_register_rejects_duplicate_email():
    with pytest.raises(ValueError):
        register_user("u-0200", "USER@example.com", "other")


def test_register_rejects_duplicate_id():
    with pytest.raises(ValueError):
        register_user("u-0001", "someone@example.com", "pw")


def test_register_requires_email_and_password():
    with pytest.raises(ValueError):
        register_user("u-0300", "  ", "pw")
    with pytest.raises(ValueError):
        register_user("u-0300", "x@example.com", "")
