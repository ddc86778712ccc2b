from flask import Blueprint, request
from utils.response import json_response
from utils.exceptions import BizError
from services.project_service import ProjectService
from controllers.auth_helpers import auth_required
from utils.permissions import get_current_identity


project_bp = Blueprint("project", __name__, url_prefix="/api/projects")


@project_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(e.to_dict(), e.code)


@project_bp.get("")
@auth_required()
def list_projects():
    return json_response([p.to_dict() for p in ProjectService.list_projects()])


@project_bp.post("")
@auth_required()
def create_project():
    data = request.get_json(silent=True) or {}
    project = ProjectService.create(data, get_current_identity())
    return json_response(project.to_dict())


@project_bp.put("/<project_id>")
@auth_required()
def update_project(project_id):
    data = request.get_json(silent=True) or {}
    return json_response(ProjectService.update(project_id, data).to_dict())


@project_bp.delete("/<project_id>")
@auth_required()
def delete_project(project_id):
    ProjectService.delete(project_id, get_current_identity())
    return json_response({"msg": "Project deleted"})


@project_bp.post("/<project_id>/members")
@auth_required()
def add_member(project_id):
    data = request.get_json(silent=True) or {}
    return json_response(ProjectService.add_member(project_id, data).to_dict())


@project_bp.delete("/<project_id>/members/<member_id>")
@auth_required()
def remove_member(project_id, member_id):
    return json_response(ProjectService.remove_member(project_id, member_id).to_dict())


@project_bp.put("/<project_id>/permissions")
@auth_required()
def update_permissions(project_id):
    data = request.get_json(silent=True) or {}
    return json_response(ProjectService.update_permissions(project_id, data).to_dict())


@project_bp.put("/<project_id>/board-settings")
@auth_required()
def update_board_settings(project_id):
    data = request.get_json(silent=True) or {}
    return json_response(ProjectService.update_board_settings(project_id, data).to_dict())
