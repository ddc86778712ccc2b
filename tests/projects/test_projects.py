# -*- coding: utf-8 -*-
"""接口测试：项目增删改、成员上限、权限与看板配置。"""

import uuid

import pytest


@pytest.fixture()
def owner(make_user):
    return make_user("QA", name="Owner")


@pytest.fixture()
def headers(owner, auth_headers):
    return auth_headers(owner)


def _create(client, headers, **extra):
    payload = {"name": f"测试项目_{uuid.uuid4().hex[:8]}", "description": "示例项目"}
    payload.update(extra)
    resp = client.post("/api/projects", json=payload, headers=headers)
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


def _member(role, password="secret123"):
    suffix = uuid.uuid4().hex[:6]
    return {"name": f"M {suffix}", "username": f"m_{suffix}", "role": role, "password": password}


def test_create_and_list(client, headers, owner):
    project = _create(client, headers)
    assert project["createdBy"] == owner.id
    assert project["_id"] == project["id"]
    assert project["permissions"]["devCanViewBugs"] is True
    assert [c["status"] for c in project["taskBoardSettings"]["columns"]] == ["To Do", "In Progress", "Done"]

    listed = client.get("/api/projects", headers=headers).get_json()
    assert [p["id"] for p in listed] == [project["id"]]


def test_requires_auth(client):
    resp = client.get("/api/projects")
    assert resp.status_code == 401
    assert "message" in resp.get_json()


def test_create_requires_name(client, headers):
    resp = client.post("/api/projects", json={"name": "  "}, headers=headers)
    assert resp.status_code == 400


def test_update_project(client, headers):
    project = _create(client, headers)
    resp = client.put(f"/api/projects/{project['id']}", json={"name": "renamed"}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["name"] == "renamed"

    resp = client.put("/api/projects/unknown", json={"name": "x"}, headers=headers)
    assert resp.status_code == 404


def test_qa_member_cap(client, headers):
    project = _create(client, headers)
    url = f"/api/projects/{project['id']}/members"
    for _ in range(3):
        assert client.post(url, json=_member("QA"), headers=headers).status_code == 200

    resp = client.post(url, json=_member("QA"), headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Maximum 3 QAs allowed per project"


def test_dev_member_cap(client, headers):
    project = _create(client, headers)
    url = f"/api/projects/{project['id']}/members"
    for _ in range(5):
        assert client.post(url, json=_member("DEV"), headers=headers).status_code == 200

    resp = client.post(url, json=_member("DEV"), headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Maximum 5 Developers allowed per project"


def test_add_member_reuses_existing_user(client, headers, make_user):
    dev = make_user("DEV", name="Dana")
    project = _create(client, headers)
    resp = client.post(
        f"/api/projects/{project['id']}/members",
        json={"name": "Dana", "username": dev.username, "role": "dev"},
        headers=headers,
    )
    assert resp.status_code == 200
    member = resp.get_json()["members"][-1]
    assert member["userId"] == dev.id
    assert member["role"] == "DEV"


def test_add_member_validations(client, headers):
    project = _create(client, headers)
    url = f"/api/projects/{project['id']}/members"

    assert client.post(url, json={"name": "x", "role": "QA"}, headers=headers).status_code == 400
    assert client.post(url, json=_member("PM"), headers=headers).status_code == 400
    # 新用户必须提供密码
    assert client.post(url, json=_member("QA", password=None), headers=headers).status_code == 400

    data = _member("QA")
    assert client.post(url, json=data, headers=headers).status_code == 200
    resp = client.post(url, json=data, headers=headers)
    assert resp.status_code == 400

    assert client.post("/api/projects/missing/members", json=_member("QA"), headers=headers).status_code == 404


def test_create_with_members_skips_duplicates(client, headers):
    m = _member("DEV")
    project = _create(client, headers, members=[m, dict(m)])
    assert [x["username"] for x in project["members"]] == [m["username"]]


def test_remove_member(client, headers):
    project = _create(client, headers, members=[_member("QA"), _member("DEV")])
    first, second = project["members"]

    resp = client.delete(f"/api/projects/{project['id']}/members/{first['id']}", headers=headers)
    assert resp.status_code == 200
    assert [m["id"] for m in resp.get_json()["members"]] == [second["id"]]

    resp = client.delete(f"/api/projects/{project['id']}/members/{first['id']}", headers=headers)
    assert resp.status_code == 404


def test_update_permissions(client, headers):
    project = _create(client, headers)
    url = f"/api/projects/{project['id']}/permissions"

    resp = client.put(url, json={"permissions": {"devCanCreateBugs": True}}, headers=headers)
    assert resp.status_code == 200
    perms = resp.get_json()["permissions"]
    assert perms["devCanCreateBugs"] is True
    assert perms["devCanViewBugs"] is True

    assert client.put(url, json={"devCanFly": True}, headers=headers).status_code == 400
    assert client.put(url, json={"devCanCreateBugs": "yes"}, headers=headers).status_code == 400


def test_update_board_settings(client, headers):
    project = _create(client, headers)
    url = f"/api/projects/{project['id']}/board-settings"

    columns = [
        {"id": "backlog", "title": "Backlog", "status": "To Do"},
        {"id": "done", "title": "Shipped", "status": "Done"},
    ]
    resp = client.put(url, json={"taskBoardSettings": {"columns": columns}}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["taskBoardSettings"]["columns"] == columns

    bad = [{"id": "x", "title": "X", "status": "Blocked"}]
    assert client.put(url, json={"columns": bad}, headers=headers).status_code == 400


def test_delete_project_creator_only(client, headers, make_user, auth_headers):
    project = _create(client, headers)
    other = auth_headers(make_user("QA"))

    resp = client.delete(f"/api/projects/{project['id']}", headers=other)
    assert resp.status_code == 403

    resp = client.delete(f"/api/projects/{project['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"msg": "Project deleted"}

    resp = client.delete(f"/api/projects/{project['id']}", headers=headers)
    assert resp.status_code == 404
