# -*- coding: utf-8 -*-
"""
task.py
--------------------------------------------------------------------
任务实体（看板卡片）：
- parent_id 指向父任务，用于子任务；删除父任务时子任务仅解除关联
- links: [{"targetType": "Bug" | "TestCase", "targetId": "..."}]
  对端分别在 Bug.linked_task_ids / TestCase.linked_task_ids 中保存反向引用
- order 用于看板内排序
"""

from extensions.database import db
from .mixins import DocumentMixin, LinkedItemMixin, COMMON_TABLE_ARGS
from constants.work_items import ItemKind, Priority, TaskStatus


class Task(DocumentMixin, LinkedItemMixin, db.Model):
    __tablename__ = "task"
    __table_args__ = (
        db.Index("ix_task_project_order", "project_id", "order"),
        COMMON_TABLE_ARGS,
    )

    KIND = ItemKind.TASK.value
    LINK_FIELDS = {
        ItemKind.BUG.value: "links",
        ItemKind.TEST_CASE.value: "links",
    }

    project_id = db.Column(db.String(32), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    status = db.Column(db.String(32), nullable=False, default=TaskStatus.TODO.value)
    priority = db.Column(db.String(16), nullable=False, default=Priority.MEDIUM.value)
    tags = db.Column(db.JSON, nullable=False, default=list)
    additional_info = db.Column(db.Text)
    attachments = db.Column(db.JSON, nullable=False, default=list)
    parent_id = db.Column(db.String(32), index=True)
    links = db.Column(db.JSON, nullable=False, default=list)
    order = db.Column(db.Integer, nullable=False, default=0)
    assigned_to = db.Column(db.String(128))
    reporter = db.Column(db.String(128))
    created_by = db.Column(db.String(32))
    friendly_id = db.Column(db.String(32), index=True)

    # ---- links 按 targetType 拆分，覆盖 LinkedItemMixin 的单字段实现 ----
    def _entries(self) -> list:
        return [dict(e) for e in (self.links or []) if isinstance(e, dict)]

    def linked_ids(self, kind: str) -> list:
        return [
            str(e.get("targetId"))
            for e in self._entries()
            if e.get("targetType") == kind and e.get("targetId")
        ]

    def add_link(self, kind: str, item_id: str) -> bool:
        if item_id in self.linked_ids(kind):
            return False
        self.links = self._entries() + [{"targetType": kind, "targetId": item_id}]
        return True

    def remove_link(self, kind: str, item_id: str) -> bool:
        if item_id not in self.linked_ids(kind):
            return False
        self.links = [
            e for e in self._entries()
            if not (e.get("targetType") == kind and str(e.get("targetId")) == item_id)
        ]
        return True

    def retain_links(self, kind: str, allowed_ids) -> None:
        allowed = set(allowed_ids)
        self.links = [
            e for e in self._entries()
            if e.get("targetType") != kind or str(e.get("targetId")) in allowed
        ]

    def clear_links(self, kind: str) -> None:
        self.links = [e for e in self._entries() if e.get("targetType") != kind]

    def to_dict(self):
        data = self._base_dict()
        data.update({
            "projectId": self.project_id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "tags": list(self.tags or []),
            "additionalInfo": self.additional_info,
            "attachments": list(self.attachments or []),
            "parentId": self.parent_id,
            "links": self._entries(),
            "order": self.order,
            "assignedTo": self.assigned_to,
            "reporter": self.reporter,
            "createdBy": self.created_by,
            "friendlyId": self.friendly_id,
        })
        return data
