from typing import List, Optional

from sqlalchemy import select, delete

from extensions.database import db
from models.notification import Notification


class NotificationRepository:
    @staticmethod
    def add_all(notifications: List[Notification]):
        db.session.add_all(notifications)

    @staticmethod
    def get_for_user(notification_id: str, user_id: str) -> Optional[Notification]:
        stmt = select(Notification).where(
            Notification.id == str(notification_id),
            Notification.user_id == str(user_id),
        )
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def list_for_user(user_id: str) -> List[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == str(user_id))
            .order_by(Notification.created_at.desc())
        )
        return list(db.session.execute(stmt).scalars())

    @staticmethod
    def delete_for_user(user_id: str) -> int:
        result = db.session.execute(
            delete(Notification).where(Notification.user_id == str(user_id))
        )
        return result.rowcount or 0

    @staticmethod
    def commit():
        db.session.commit()
