# -*- coding: utf-8 -*-
"""
bug.py
--------------------------------------------------------------------
缺陷实体：
- friendly_id 形如 BUG-7
- linked_test_case_ids / linked_task_ids 与对端双向维护
- 状态离开 Draft 后 steps_to_reproduce 必填
- attachments 保存对象存储返回的 URL
"""

from extensions.database import db
from .mixins import DocumentMixin, LinkedItemMixin, COMMON_TABLE_ARGS
from constants.work_items import ItemKind, BugSeverity, BugStatus


class Bug(DocumentMixin, LinkedItemMixin, db.Model):
    __tablename__ = "bug"
    __table_args__ = (
        db.Index("ix_bug_project_status", "project_id", "status"),
        COMMON_TABLE_ARGS,
    )

    KIND = ItemKind.BUG.value
    LINK_FIELDS = {
        ItemKind.TEST_CASE.value: "linked_test_case_ids",
        ItemKind.TASK.value: "linked_task_ids",
    }

    project_id = db.Column(db.String(32), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    steps_to_reproduce = db.Column(db.Text)
    test_data = db.Column(db.Text)
    expected_result = db.Column(db.Text)
    actual_result = db.Column(db.Text)
    severity = db.Column(db.String(16), nullable=False, default=BugSeverity.MEDIUM.value)
    status = db.Column(db.String(16), nullable=False, default=BugStatus.DRAFT.value)
    tags = db.Column(db.JSON, nullable=False, default=list)
    linked_test_case_ids = db.Column(db.JSON, nullable=False, default=list)
    linked_task_ids = db.Column(db.JSON, nullable=False, default=list)
    attachments = db.Column(db.JSON, nullable=False, default=list)
    friendly_id = db.Column(db.String(32), index=True)
    created_by = db.Column(db.String(32))

    def to_dict(self):
        data = self._base_dict()
        data.update({
            "projectId": self.project_id,
            "title": self.title,
            "description": self.description,
            "stepsToReproduce": self.steps_to_reproduce,
            "testData": self.test_data,
            "expectedResult": self.expected_result,
            "actualResult": self.actual_result,
            "severity": self.severity,
            "status": self.status,
            "tags": list(self.tags or []),
            "linkedTestCaseIds": self.linked_ids(ItemKind.TEST_CASE.value),
            "linkedTaskIds": self.linked_ids(ItemKind.TASK.value),
            "attachments": list(self.attachments or []),
            "friendlyId": self.friendly_id,
            "createdBy": self.created_by,
        })
        return data
