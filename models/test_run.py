# -*- coding: utf-8 -*-
"""
test_run.py
--------------------------------------------------------------------
用例执行记录（只追加，不修改）：
- run_id 形如 RUN-001，按项目递增；(project_id, run_id) 唯一
- 来源：显式上报，或用例状态切换为 Pass / Fail 时自动生成
- executed_by 记录执行人，序列化时补充 name / username
"""

from extensions.database import db
from .mixins import DocumentMixin, COMMON_TABLE_ARGS
from utils.datetime_helpers import utcnow, datetime_to_iso


class TestRun(DocumentMixin, db.Model):
    __tablename__ = "test_run"
    __table_args__ = (
        db.UniqueConstraint("project_id", "run_id", name="uq_test_run_project_run"),
        db.Index("ix_test_run_case_time", "test_case_id", "run_date_time"),
        COMMON_TABLE_ARGS,
    )
    __test__ = False

    run_id = db.Column(db.String(32), nullable=False)
    test_case_id = db.Column(db.String(32), nullable=False)
    project_id = db.Column(db.String(32), nullable=False, index=True)
    status = db.Column(db.String(8), nullable=False)
    executed_by = db.Column(db.String(32), nullable=False)
    run_date_time = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self, executor=None):
        data = self._base_dict()
        data.update({
            "runId": self.run_id,
            "testCaseId": self.test_case_id,
            "projectId": self.project_id,
            "status": self.status,
            "executedBy": executor.to_brief_dict() if executor else self.executed_by,
            "runDateTime": datetime_to_iso(self.run_date_time),
        })
        return data
