from flask import Blueprint, request

from controllers.auth_helpers import auth_required
from services.note_service import NoteService
from utils.exceptions import BizError
from utils.response import json_response

note_bp = Blueprint("note", __name__, url_prefix="/api/notes")


@note_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(e.to_dict(), e.code)


@note_bp.get("")
@auth_required()
def list_notes():
    return json_response([n.to_dict() for n in NoteService.list(request.args.get("projectId"))])


@note_bp.post("")
@auth_required()
def create_note():
    data = request.get_json(silent=True) or {}
    return json_response(NoteService.create(data).to_dict())


@note_bp.put("/<note_id>")
@auth_required()
def update_note(note_id):
    data = request.get_json(silent=True) or {}
    return json_response(NoteService.update(note_id, data).to_dict())


@note_bp.delete("/<note_id>")
@auth_required()
def delete_note(note_id):
    NoteService.delete(note_id)
    return json_response({"msg": "Note deleted"})
