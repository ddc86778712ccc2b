from flask import Blueprint, request

from controllers.auth_helpers import auth_required
from services.comment_service import CommentService
from utils.exceptions import BizError
from utils.permissions import get_current_identity
from utils.response import json_response

comment_bp = Blueprint("comment", __name__, url_prefix="/api/comments")


@comment_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(e.to_dict(), e.code)


@comment_bp.get("/<bug_id>")
@auth_required()
def list_comments(bug_id):
    return json_response([c.to_dict() for c in CommentService.list_for_bug(bug_id)])


@comment_bp.post("")
@auth_required()
def create_comment():
    data = request.get_json(silent=True) or {}
    return json_response(CommentService.create(data, get_current_identity()).to_dict())


@comment_bp.put("/<comment_id>/resolve")
@auth_required()
def resolve_comment(comment_id):
    return json_response(CommentService.resolve(comment_id).to_dict())
