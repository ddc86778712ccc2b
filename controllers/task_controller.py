from flask import Blueprint, request

from controllers.auth_helpers import auth_required
from services.task_service import TaskService
from utils.exceptions import BizError
from utils.permissions import get_current_identity
from utils.response import json_response

task_bp = Blueprint("task", __name__, url_prefix="/api/tasks")


@task_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(e.to_dict(), e.code)


@task_bp.get("")
@auth_required()
def list_tasks():
    tasks = TaskService.list(request.args.get("projectId"))
    return json_response([t.to_dict() for t in tasks])


@task_bp.post("")
@auth_required()
def create_task():
    data = request.get_json(silent=True) or {}
    return json_response(TaskService.create(data, get_current_identity()).to_dict())


@task_bp.put("/<task_id>")
@auth_required()
def update_task(task_id):
    data = request.get_json(silent=True) or {}
    return json_response(TaskService.update(task_id, data, get_current_identity()).to_dict())


@task_bp.delete("/<task_id>")
@auth_required()
def delete_task(task_id):
    TaskService.delete(task_id)
    return json_response({"msg": "Task deleted"})
