# -*- coding: utf-8 -*-
"""附件上传接口，错误体使用 {"error": ...}"""

from flask import Blueprint, request

from controllers.auth_helpers import auth_required
from services.upload_service import UploadService
from utils.exceptions import BizError
from utils.response import json_response

upload_bp = Blueprint("upload", __name__, url_prefix="/api/upload")


@upload_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(e.to_dict(), e.code)


@upload_bp.post("/upload")
@auth_required()
def upload_file():
    return json_response(UploadService.upload(request.files.get("file")))


@upload_bp.delete("/delete")
@auth_required()
def delete_file():
    data = request.get_json(silent=True) or {}
    return json_response(UploadService.delete(data.get("fileUrl")))
