# -*- coding: utf-8 -*-
"""
test_case.py
--------------------------------------------------------------------
测试用例实体：
- friendly_id 形如 TC-12，仅用于展示，不保证全局唯一（见 repair 命令）
- linked_bug_ids / linked_task_ids 与对端双向维护
- 状态离开 Draft 后 steps / expected_result 必填
- 状态切换到 Pass / Fail 时会追加一条 TestRun
"""

from extensions.database import db
from .mixins import DocumentMixin, LinkedItemMixin, COMMON_TABLE_ARGS
from constants.work_items import ItemKind, Priority, TestCaseStatus


class TestCase(DocumentMixin, LinkedItemMixin, db.Model):
    __tablename__ = "test_case"
    __table_args__ = (
        db.Index("ix_test_case_project_status", "project_id", "status"),
        COMMON_TABLE_ARGS,
    )
    __test__ = False

    KIND = ItemKind.TEST_CASE.value
    LINK_FIELDS = {
        ItemKind.BUG.value: "linked_bug_ids",
        ItemKind.TASK.value: "linked_task_ids",
    }

    project_id = db.Column(db.String(32), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    preconditions = db.Column(db.Text)
    steps = db.Column(db.Text)
    expected_result = db.Column(db.Text)
    priority = db.Column(db.String(16), nullable=False, default=Priority.MEDIUM.value)
    status = db.Column(db.String(32), nullable=False, default=TestCaseStatus.DRAFT.value)
    tags = db.Column(db.JSON, nullable=False, default=list)
    friendly_id = db.Column(db.String(32), index=True)
    linked_bug_ids = db.Column(db.JSON, nullable=False, default=list)
    linked_task_ids = db.Column(db.JSON, nullable=False, default=list)
    created_by = db.Column(db.String(32))

    def to_dict(self):
        data = self._base_dict()
        data.update({
            "projectId": self.project_id,
            "title": self.title,
            "description": self.description,
            "preconditions": self.preconditions,
            "steps": self.steps,
            "expectedResult": self.expected_result,
            "priority": self.priority,
            "status": self.status,
            "tags": list(self.tags or []),
            "friendlyId": self.friendly_id,
            "linkedBugIds": self.linked_ids(ItemKind.BUG.value),
            "linkedTaskIds": self.linked_ids(ItemKind.TASK.value),
            "createdBy": self.created_by,
        })
        return data
