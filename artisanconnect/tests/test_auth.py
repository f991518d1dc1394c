from __future__ import annotations

from fastapi.testclient import TestClient

from artisanconnect.app import app
from artisanconnect.auth.config import AuthConfig
from artisanconnect.auth.users import authenticate, seed_admin
from helpers import login_admin, login_user, login_vendor

client = TestClient(app)


# ── Login / Logout ───────────────────────────────────────────────────────


def test_login_success_user():
    resp = client.post("/auth/login", json={"username": "user", "password": "user12345"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["user"] == {"username": "user", "role": "user"}


def test_login_success_admin():
    resp = client.post("/auth/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "admin"


def test_login_wrong_password():
    resp = client.post("/auth/login", json={"username": "user", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unknown_user():
    resp = client.post("/auth/login", json={"username": "nobody", "password": "x"})
    assert resp.status_code == 401


def test_auth_me_when_logged_in():
    login_user(client)
    resp = client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["username"] == "user"


def test_auth_me_not_logged_in():
    c = TestClient(app)  # fresh client, no session
    assert c.get("/auth/me").status_code == 401


def test_logout():
    login_user(client)
    resp = client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["status"] == "logged_out"
    assert client.get("/auth/me").status_code == 401


# ── Sign up ──────────────────────────────────────────────────────────────


def test_signup_vendor_logs_in():
    c = TestClient(app)
    resp = c.post("/auth/signup", json={
        "username": "tailor42", "password": "needle-and-thread", "role": "vendor",
    })
    assert resp.status_code == 200
    assert resp.json()["user"] == {"username": "tailor42", "role": "vendor"}
    assert c.get("/auth/me").json()["role"] == "vendor"


def test_signup_duplicate_username():
    resp = client.post("/auth/signup", json={"username": "user", "password": "another-pass"})
    assert resp.status_code == 409


def test_signup_cannot_create_admin():
    resp = client.post("/auth/signup", json={
        "username": "sneaky", "password": "password123", "role": "admin",
    })
    assert resp.status_code == 422


def test_signup_rejects_short_password():
    resp = client.post("/auth/signup", json={"username": "shorty", "password": "abc"})
    assert resp.status_code == 422


def test_no_admin_without_configuration():
    assert seed_admin(AuthConfig(admin_username="", admin_password="")) is False
    assert authenticate("", "") is None


# ── Route protection ─────────────────────────────────────────────────────


def test_reviews_require_login():
    c = TestClient(app)
    assert c.post("/vendors/v001/reviews", json={"rating": 4}).status_code == 401


def test_vendor_profile_requires_vendor_role():
    login_user(client)
    assert client.get("/vendor/profile").status_code == 403


def test_vendor_profile_allowed_for_vendor():
    login_vendor(client)
    # No profile saved yet, but access is granted
    assert client.get("/vendor/profile").status_code == 404


def test_admin_routes_require_admin():
    login_user(client)
    for path in ("/admin/suggestions", "/admin/activities", "/admin/stats"):
        assert client.get(path).status_code == 403


def test_admin_routes_allowed_for_admin():
    login_admin(client)
    for path in ("/admin/suggestions", "/admin/activities", "/admin/stats"):
        assert client.get(path).status_code == 200


def test_blacklist_requires_admin():
    login_vendor(client)
    assert client.post("/admin/vendors/v001/blacklist").status_code == 403


# ── Public endpoints stay public ─────────────────────────────────────────


def test_health_is_public():
    c = TestClient(app)
    assert c.get("/health").status_code == 200


def test_metadata_is_public():
    c = TestClient(app)
    assert c.get("/metadata").status_code == 200
