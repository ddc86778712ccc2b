from extensions.database import db
from .mixins import DocumentMixin, COMMON_TABLE_ARGS
from constants.work_items import NoteType


class Note(DocumentMixin, db.Model):
    __tablename__ = "note"
    __table_args__ = (COMMON_TABLE_ARGS,)

    # 仅用于列表过滤，不参与任何关联维护
    project_id = db.Column(db.String(32), index=True)
    type = db.Column(db.String(8), nullable=False, default=NoteType.SIMPLE.value)
    label = db.Column(db.String(255))
    content = db.Column(db.Text, nullable=False)
    pinned = db.Column(db.Boolean, nullable=False, default=False)
    hidden = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        data = self._base_dict()
        data.update({
            "projectId": self.project_id,
            "type": self.type,
            "label": self.label,
            "content": self.content,
            "pinned": bool(self.pinned),
            "hidden": bool(self.hidden),
        })
        return data
