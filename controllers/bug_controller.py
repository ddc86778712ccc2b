from flask import Blueprint, request

from controllers.auth_helpers import auth_required
from services.bug_service import BugService
from utils.exceptions import BizError
from utils.permissions import get_current_identity
from utils.response import json_response

bug_bp = Blueprint("bug", __name__, url_prefix="/api/bugs")


@bug_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(e.to_dict(), e.code)


@bug_bp.get("")
@auth_required()
def list_bugs():
    bugs = BugService.list(request.args.get("projectId"))
    return json_response([b.to_dict() for b in bugs])


@bug_bp.post("")
@auth_required()
def create_bug():
    data = request.get_json(silent=True) or {}
    return json_response(BugService.create(data, get_current_identity()).to_dict())


@bug_bp.put("/<bug_id>")
@auth_required()
def update_bug(bug_id):
    data = request.get_json(silent=True) or {}
    return json_response(BugService.update(bug_id, data, get_current_identity()).to_dict())


@bug_bp.delete("/<bug_id>")
@auth_required()
def delete_bug(bug_id):
    BugService.delete(bug_id)
    return json_response({"msg": "Bug deleted"})
