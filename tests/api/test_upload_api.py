# -*- coding: utf-8 -*-
"""接口测试：附件上传 / 删除（对象存储替换为内存实现）。"""

import io

import pytest
from botocore.exceptions import ClientError


@pytest.fixture()
def headers(make_user, auth_headers):
    return auth_headers(make_user("QA"))


def _upload(client, headers, data=b"\x89PNG....", filename="shot.png", content_type="image/png"):
    return client.post(
        "/api/upload/upload",
        data={"file": (io.BytesIO(data), filename, content_type)},
        headers=headers,
        content_type="multipart/form-data",
    )


def test_upload_requires_file(client, headers, fake_s3):
    resp = client.post("/api/upload/upload", data={}, headers=headers, content_type="multipart/form-data")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "No file provided"}


def test_upload_rejects_mime_type(client, headers, fake_s3):
    resp = _upload(client, headers, filename="run.sh", content_type="application/x-sh")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Only images, videos, and documents are allowed"}
    assert fake_s3.objects == {}


def test_upload_rejects_large_file(client, headers, fake_s3, app):
    app.config["UPLOAD_MAX_BYTES"] = 4
    resp = _upload(client, headers, data=b"0123456789")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "File too large"}


def test_upload_and_delete(client, headers, fake_s3):
    resp = _upload(client, headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "File uploaded successfully"
    assert body["fileName"] == "shot.png"
    assert body["publicId"].startswith("qa-share/attachments/")
    assert body["publicId"].endswith(".png")
    assert body["url"] == f"https://files.example.test/{body['publicId']}"
    assert ("qa-share", body["publicId"]) in fake_s3.objects

    resp = client.delete("/api/upload/delete", json={"fileUrl": body["url"]}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "File deleted successfully"}
    assert fake_s3.deleted == [("qa-share", body["publicId"])]


def test_delete_requires_url(client, headers, fake_s3):
    resp = client.delete("/api/upload/delete", json={}, headers=headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "File URL is required"}


def test_storage_failure_is_500(client, headers, fake_s3):
    def boom(**kwargs):
        raise ClientError({"Error": {"Code": "500", "Message": "down"}}, "PutObject")

    fake_s3.put_object = boom
    resp = _upload(client, headers)
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to upload file"}


def test_upload_requires_auth(client, fake_s3):
    assert _upload(client, {}).status_code == 401
