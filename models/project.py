# -*- coding: utf-8 -*-
"""
project.py
--------------------------------------------------------------------
项目实体及成员：
- Project: 用例 / 缺陷 / 任务 / 执行记录的业务边界。
  permissions 与 task_board_settings 作为内嵌文档存 JSON。
- ProjectMember: 成员快照（name / username / role 写入后不再同步 User），
  position 保持花名册顺序。
约束：
- 同一项目 QA 最多 3 人、DEV 最多 5 人（在 ProjectService 中校验）。
"""

from extensions.database import db
from .mixins import DocumentMixin, COMMON_TABLE_ARGS
from constants.project import default_permissions, default_board_settings
from utils.datetime_helpers import datetime_to_iso


class Project(DocumentMixin, db.Model):
    __tablename__ = "project"
    __table_args__ = (COMMON_TABLE_ARGS,)

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    created_by = db.Column(db.String(32), nullable=False, index=True)
    permissions = db.Column(db.JSON, nullable=False, default=default_permissions)
    task_board_settings = db.Column(db.JSON, nullable=False, default=default_board_settings)

    members = db.relationship(
        "ProjectMember",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectMember.position",
    )

    def member_count(self, role: str) -> int:
        return sum(1 for m in self.members if m.role == role)

    def find_member_by_username(self, username: str):
        for m in self.members:
            if m.username and m.username == username:
                return m
        return None

    def member_recipient_ids(self) -> list:
        return [m.recipient_id for m in self.members]

    def to_dict(self):
        data = self._base_dict()
        data.update({
            "name": self.name,
            "description": self.description,
            "createdBy": self.created_by,
            "members": [m.to_dict() for m in self.members],
            "permissions": self.permissions or default_permissions(),
            "taskBoardSettings": self.task_board_settings or default_board_settings(),
        })
        return data


class ProjectMember(db.Model):
    __tablename__ = "project_member"
    __table_args__ = (
        db.Index("ix_project_member_project_position", "project_id", "position"),
        COMMON_TABLE_ARGS,
    )

    id = db.Column(db.String(32), primary_key=True)
    project_id = db.Column(
        db.String(32), db.ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )
    # 引用 User，可能为空（历史数据）
    user_id = db.Column(db.String(32), index=True)
    name = db.Column(db.String(128), nullable=False)
    username = db.Column(db.String(64))
    # 仅用于生成的成员账号展示，可为空
    password = db.Column(db.String(128))
    role = db.Column(db.String(8), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime)

    project = db.relationship("Project", back_populates="members")

    @property
    def recipient_id(self) -> str:
        """通知接收人：优先 userId，缺失时退回成员记录 id"""
        return str(self.user_id or self.id)

    def to_dict(self):
        return {
            "id": self.id,
            "_id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "username": self.username,
            "password": self.password or "",
            "role": self.role,
            "createdAt": datetime_to_iso(self.created_at),
        }
