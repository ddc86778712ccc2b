# -*- coding: utf-8 -*-
"""
upload_service.py
--------------------------------------------------------------------
附件上传 / 删除（S3 兼容对象存储）。
对象 key：<UPLOAD_FOLDER>/<uuid><ext>；删除时按 URL 末段反推 key。
存储层异常记录日志后转换为 {"error": ...} 500。
"""

import logging
import os
import uuid
from urllib.parse import urlparse

from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app

from extensions import object_storage
from utils.exceptions import BizError

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (BotoCoreError, ClientError)


class UploadError(BizError):
    """上传接口的错误体使用 error 键"""

    def to_dict(self) -> dict:
        return {"error": self.message}


class UploadService:

    @staticmethod
    def _object_key(filename: str) -> str:
        ext = os.path.splitext(filename or "")[1].lower()
        folder = current_app.config["UPLOAD_FOLDER"].strip("/")
        return f"{folder}/{uuid.uuid4().hex}{ext}"

    @staticmethod
    def upload(file_storage) -> dict:
        if file_storage is None or not file_storage.filename:
            raise UploadError("No file provided", 400)

        cfg = current_app.config
        mimetype = (file_storage.mimetype or "").lower()
        if mimetype not in cfg["UPLOAD_ALLOWED_MIME_TYPES"]:
            raise UploadError("Only images, videos, and documents are allowed", 400)

        body = file_storage.read()
        if len(body) > cfg["UPLOAD_MAX_BYTES"]:
            raise UploadError("File too large", 400)

        key = UploadService._object_key(file_storage.filename)
        try:
            object_storage.put_object(key, body, mimetype)
        except STORAGE_ERRORS:
            logger.exception("upload failed: %s", key)
            raise UploadError("Failed to upload file", 500)

        logger.info("uploaded %s (%d bytes) as %s", file_storage.filename, len(body), key)
        return {
            "message": "File uploaded successfully",
            "url": object_storage.public_url(key),
            "fileName": file_storage.filename,
            "publicId": key,
        }

    @staticmethod
    def key_from_url(file_url: str) -> str:
        path = urlparse(file_url).path or file_url
        basename = os.path.basename(path.rstrip("/"))
        if not basename:
            raise UploadError("File URL is required", 400)
        folder = current_app.config["UPLOAD_FOLDER"].strip("/")
        return f"{folder}/{basename}"

    @staticmethod
    def delete(file_url) -> dict:
        if not isinstance(file_url, str) or not file_url.strip():
            raise UploadError("File URL is required", 400)
        key = UploadService.key_from_url(file_url.strip())
        try:
            object_storage.delete_object(key)
        except STORAGE_ERRORS:
            logger.exception("delete failed: %s", key)
            raise UploadError("Failed to delete file", 500)
        logger.info("deleted %s", key)
        return {"message": "File deleted successfully"}
