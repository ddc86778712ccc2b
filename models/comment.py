# -*- coding: utf-8 -*-
"""
comment.py
--------------------------------------------------------------------
缺陷评论：
- parent_id 支持单层回复
- user_name 为创建时的快照，用户改名后不回写
- resolved 标记讨论已解决
"""


from extensions.database import db
from .mixins import DocumentMixin, COMMON_TABLE_ARGS


class Comment(DocumentMixin, db.Model):
    __tablename__ = "comment"
    __table_args__ = (
        db.Index("ix_comment_bug_created", "bug_id", "created_at"),
        COMMON_TABLE_ARGS,
    )

    bug_id = db.Column(db.String(32), nullable=False)
    user_id = db.Column(db.String(32), nullable=False)
    user_name = db.Column(db.String(128), nullable=False)
    content = db.Column(db.Text, nullable=False)
    parent_id = db.Column(db.String(32))
    resolved = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        data = self._base_dict()
        data.update({
            "bugId": self.bug_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "content": self.content,
            "parentId": self.parent_id,
            "resolved": bool(self.resolved),
        })
        return data
