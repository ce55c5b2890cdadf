from __future__ import annotations


def _register(client, **overrides):
    body = {"email": "owner@example.com", "password": "secret1", "name": "Owner", "companyName": "Bright"}
    body.update(overrides)
    return client.post("/api/admin/register", json=body)


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_register_and_login(client):
    resp = _register(client)
    assert resp.status_code == 201
    assert resp.get_json()["admin"]["role"] == "admin"

    assert _register(client).status_code == 400

    resp = client.post("/api/admin/login", json={"email": "owner@example.com", "password": "secret1"})
    assert resp.status_code == 200
    assert resp.get_json()["token"]

    resp = client.post("/api/admin/login", json={"email": "owner@example.com", "password": "bad-pass"})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid email or password"}


def test_profile_and_change_password(client):
    token = _register(client).get_json()["token"]

    profile = client.get("/api/admin/profile", headers=_auth(token)).get_json()
    assert profile["companyName"] == "Bright"

    resp = client.put("/api/admin/change-password", json={"currentPassword": "secret1"}, headers=_auth(token))
    assert resp.status_code == 400

    resp = client.put(
        "/api/admin/change-password",
        json={"currentPassword": "wrong1", "newPassword": "newpass1"},
        headers=_auth(token),
    )
    assert resp.status_code == 401

    resp = client.put(
        "/api/admin/change-password",
        json={"currentPassword": "secret1", "newPassword": "newpass1"},
        headers=_auth(token),
    )
    assert resp.get_json() == {"message": "Password changed successfully"}


def test_change_password_requires_token(client):
    resp = client.put("/api/admin/change-password", json={"currentPassword": "a", "newPassword": "b"})

    assert resp.status_code == 401


def test_change_password_for_deleted_admin(client, tokens):
    token = tokens.issue_admin_token(admin_id=41, email="gone@example.com")

    resp = client.put(
        "/api/admin/change-password",
        json={"currentPassword": "secret1", "newPassword": "newpass1"},
        headers=_auth(token),
    )

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Admin not found"}


def test_preferences_roundtrip(client):
    token = _register(client).get_json()["token"]

    assert client.get("/api/admin/preferences", headers=_auth(token)).get_json()["sessionTimeout"] == 30

    resp = client.put("/api/admin/preferences", json={"darkMode": True}, headers=_auth(token))
    assert resp.get_json()["darkMode"] is True

    resp = client.put("/api/admin/preferences", json={"fontSize": 14}, headers=_auth(token))
    assert resp.status_code == 400

    resp = client.delete("/api/admin/preferences", headers=_auth(token))
    assert resp.get_json()["darkMode"] is False
