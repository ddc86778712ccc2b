from typing import List, Optional

from constants.work_items import NoteType, validate_choice
from models.note import Note
from repositories.note_repository import NoteRepository
from utils.exceptions import BizError
from utils.payload import as_bool, pick_fields

FIELD_MAP = {
    "projectId": "project_id",
    "type": "type",
    "label": "label",
    "content": "content",
    "pinned": "pinned",
    "hidden": "hidden",
}


class NoteService:

    @staticmethod
    def _apply(note: Note, data: dict):
        values = pick_fields(data, FIELD_MAP)
        for flag in ("pinned", "hidden"):
            if flag in values:
                values[flag] = as_bool(values[flag], flag)
        for attr, value in values.items():
            setattr(note, attr, value)
        validate_choice("type", note.type, NoteType)
        if not isinstance(note.content, str) or not note.content.strip():
            raise BizError("content is required", 400)

    @staticmethod
    def list(project_id: Optional[str] = None) -> List[Note]:
        return NoteRepository.list(project_id)

    @staticmethod
    def create(data: dict) -> Note:
        note = Note()
        NoteService._apply(note, data)
        NoteRepository.add(note)
        NoteRepository.commit()
        return note

    @staticmethod
    def update(note_id: str, data: dict) -> Note:
        note = NoteRepository.get_by_id(note_id)
        if not note:
            raise BizError("Note not found", 404)
        NoteService._apply(note, data)
        NoteRepository.commit()
        return note

    @staticmethod
    def delete(note_id: str):
        note = NoteRepository.get_by_id(note_id)
        if not note:
            raise BizError("Note not found", 404)
        NoteRepository.delete(note)
        NoteRepository.commit()
