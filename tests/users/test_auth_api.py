# -*- coding: utf-8 -*-
"""接口测试：注册 / 登录 / 登出 / 改密 / 资料修改 / 演示 token。"""

import uuid

import pytest

from services.user_service import UserService


def _register(client, **extra):
    suffix = uuid.uuid4().hex[:8]
    payload = {
        "name": f"User {suffix}",
        "username": f"user_{suffix}",
        "password": "secret123",
        "role": "QA",
    }
    payload.update(extra)
    return payload, client.post("/api/auth/register", json=payload)


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_register_returns_token_and_user(client):
    payload, resp = _register(client, role="dev")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["token"]
    assert body["user"]["username"] == payload["username"]
    assert body["user"]["role"] == "DEV"
    assert "password" not in body["user"]


def test_register_duplicate_username(client):
    payload, _ = _register(client)
    _, resp = _register(client, username=payload["username"])
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "User already exists"}


@pytest.mark.parametrize("override", [
    {"name": ""},
    {"password": ""},
    {"password": "123"},
    {"role": "ADMIN"},
])
def test_register_validation(client, override):
    _, resp = _register(client, **override)
    assert resp.status_code == 400


def test_login(client):
    payload, _ = _register(client)
    resp = client.post("/api/auth/login", json={"username": payload["username"], "password": "secret123"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["name"] == payload["name"]

    resp = client.post("/api/auth/login", json={"username": payload["username"], "password": "wrong"})
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Invalid Credentials"}

    resp = client.post("/api/auth/login", json={"username": "ghost", "password": "secret123"})
    assert resp.status_code == 400


def test_missing_or_invalid_token(client):
    assert client.get("/api/projects").status_code == 401
    assert client.get("/api/projects", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/api/projects", headers=_bearer("not.a.token")).status_code == 401


def test_logout_revokes_token(client, fake_redis):
    _, resp = _register(client)
    token = resp.get_json()["token"]
    assert client.get("/api/projects", headers=_bearer(token)).status_code == 200

    resp = client.post("/api/auth/logout", headers=_bearer(token))
    assert resp.status_code == 200
    assert any(key.startswith("jwt:blk:") for key in fake_redis.store)

    assert client.get("/api/projects", headers=_bearer(token)).status_code == 401


def test_logout_without_token_is_ok(client):
    assert client.post("/api/auth/logout").status_code == 200


def test_change_password_invalidates_old_token(client):
    payload, resp = _register(client)
    old_token = resp.get_json()["token"]

    resp = client.put(
        "/api/auth/password",
        json={"currentPassword": "wrong", "newPassword": "another123"},
        headers=_bearer(old_token),
    )
    assert resp.status_code == 400

    resp = client.put(
        "/api/auth/password",
        json={"currentPassword": "secret123", "newPassword": "another123"},
        headers=_bearer(old_token),
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Password updated successfully"
    new_token = body["token"]

    assert client.get("/api/projects", headers=_bearer(old_token)).status_code == 401
    assert client.get("/api/projects", headers=_bearer(new_token)).status_code == 200

    resp = client.post("/api/auth/login", json={"username": payload["username"], "password": "another123"})
    assert resp.status_code == 200


def test_change_password_rejects_same_password(client):
    _, resp = _register(client)
    token = resp.get_json()["token"]
    resp = client.put(
        "/api/auth/password",
        json={"currentPassword": "secret123", "newPassword": "secret123"},
        headers=_bearer(token),
    )
    assert resp.status_code == 400


def test_update_profile(client):
    taken, _ = _register(client)
    _, resp = _register(client)
    token = resp.get_json()["token"]

    resp = client.put("/api/auth/profile", json={"name": "New Name", "username": ""}, headers=_bearer(token))
    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["name"] == "New Name"

    resp = client.put("/api/auth/profile", json={"username": taken["username"]}, headers=_bearer(token))
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Username already taken"}


def test_demo_tokens(client, app):
    UserService.ensure_demo_users(app)
    resp = client.post("/api/projects", json={"name": "Demo"}, headers=_bearer("demo-token-qa"))
    assert resp.status_code == 200
    project = resp.get_json()
    assert project["createdBy"] == app.config["DEMO_QA_USER_ID"]
    # 演示账号默认成为成员
    assert {m["username"] for m in project["members"]} == {"demo-qa", "demo-dev"}

    assert client.get("/api/projects", headers=_bearer("demo-token-dev")).status_code == 200
