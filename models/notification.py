from extensions.database import db
from .mixins import DocumentMixin, COMMON_TABLE_ARGS


class Notification(DocumentMixin, db.Model):
    __tablename__ = "notification"
    __table_args__ = (
        db.Index("ix_notification_user_created", "user_id", "created_at"),
        COMMON_TABLE_ARGS,
    )

    user_id = db.Column(db.String(32), nullable=False)
    type = db.Column(db.String(32), nullable=False)
    bug_id = db.Column(db.String(32))
    bug_title = db.Column(db.String(255))  # 快照
    message = db.Column(db.Text, nullable=False)
    read = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        data = self._base_dict()
        data.update({
            "userId": self.user_id,
            "type": self.type,
            "bugId": self.bug_id,
            "bugTitle": self.bug_title,
            "message": self.message,
            "read": bool(self.read),
        })
        return data
