from typing import List, Optional

from sqlalchemy import select

from extensions.database import db
from models.note import Note


class NoteRepository:
    @staticmethod
    def add(note: Note) -> Note:
        db.session.add(note)
        return note

    @staticmethod
    def get_by_id(note_id: str) -> Optional[Note]:
        if not note_id:
            return None
        return db.session.get(Note, str(note_id))

    @staticmethod
    def list(project_id: Optional[str] = None) -> List[Note]:
        stmt = select(Note)
        if project_id:
            stmt = stmt.where(Note.project_id == str(project_id))
        stmt = stmt.order_by(Note.created_at.desc())
        return list(db.session.execute(stmt).scalars())

    @staticmethod
    def delete(note: Note):
        db.session.delete(note)

    @staticmethod
    def commit():
        db.session.commit()
