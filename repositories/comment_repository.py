from typing import List, Optional

from sqlalchemy import select

from extensions.database import db
from models.comment import Comment


class CommentRepository:
    @staticmethod
    def add(comment: Comment) -> Comment:
        db.session.add(comment)
        return comment

    @staticmethod
    def get_by_id(comment_id: str) -> Optional[Comment]:
        if not comment_id:
            return None
        return db.session.get(Comment, str(comment_id))

    @staticmethod
    def list_for_bug(bug_id: str) -> List[Comment]:
        stmt = (
            select(Comment)
            .where(Comment.bug_id == str(bug_id))
            .order_by(Comment.created_at.asc())
        )
        return list(db.session.execute(stmt).scalars())

    @staticmethod
    def commit():
        db.session.commit()
