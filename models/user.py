# -*- coding: utf-8 -*-
"""
user.py
--------------------------------------------------------------------
用户实体。
说明：
- username 全局唯一；role 为 QA / DEV，创建后不再单独修改。
- 项目内的成员身份通过 ProjectMember 快照保存，不反向同步。
- password_version 在修改密码时递增，旧 token 随之失效。
"""

from extensions.database import db
from .mixins import DocumentMixin, COMMON_TABLE_ARGS
from constants.roles import MemberRole


class User(DocumentMixin, db.Model):
    __tablename__ = "user"
    __table_args__ = (COMMON_TABLE_ARGS,)

    name = db.Column(db.String(128), nullable=False)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(8), nullable=False, default=MemberRole.QA.value)
    password_version = db.Column(db.Integer, nullable=False, default=1)

    def __repr__(self):
        return f"<User id={self.id} username={self.username} role={self.role}>"

    def bump_password_version(self):
        self.password_version = (self.password_version or 0) + 1

    def to_public_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "role": self.role,
        }

    def to_brief_dict(self):
        return {"id": self.id, "_id": self.id, "name": self.name, "username": self.username}
