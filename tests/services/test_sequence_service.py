# -*- coding: utf-8 -*-
"""单元测试：友好编号 / 执行编号分配与重复修复。"""

from datetime import datetime, timedelta

from constants.work_items import ItemKind
from extensions.database import db
from models import Bug, TestCase
from services.sequence_service import SequenceService
from services.test_case_service import TestCaseService
from services.test_run_service import TestRunService

BASE_TIME = datetime(2025, 1, 1, 8, 0, 0)


def _raw_case(project_id, friendly_id, minutes, title="case"):
    tc = TestCase(
        project_id=project_id,
        title=title,
        friendly_id=friendly_id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db.session.add(tc)
    return tc


def test_first_friendly_id_per_kind(app):
    assert SequenceService.next_friendly_id(ItemKind.TEST_CASE.value) == "TC-1"
    assert SequenceService.next_friendly_id(ItemKind.BUG.value) == "BUG-1"
    assert SequenceService.next_friendly_id(ItemKind.TASK.value) == "TASK-1"


def test_sequential_creation_through_service(app, make_user, make_project, identity_for):
    qa = make_user("QA")
    project = make_project(qa)
    ids = [
        TestCaseService.create({"projectId": project.id, "title": f"c{i}"}, identity_for(qa)).friendly_id
        for i in range(5)
    ]
    assert ids == ["TC-1", "TC-2", "TC-3", "TC-4", "TC-5"]


def test_latest_is_chosen_by_created_at(app):
    """按创建时间取最新一条，而不是按编号最大值"""
    _raw_case("p1", "TC-9", minutes=1)
    _raw_case("p1", "TC-3", minutes=2)
    db.session.commit()
    assert SequenceService.next_friendly_id(ItemKind.TEST_CASE.value) == "TC-4"


def test_same_timestamp_takes_largest_suffix(app):
    _raw_case("p1", "TC-5", minutes=3)
    _raw_case("p1", "TC-2", minutes=3)
    db.session.commit()
    assert SequenceService.next_friendly_id(ItemKind.TEST_CASE.value) == "TC-6"


def test_other_prefixes_are_ignored(app):
    _raw_case("p1", "LEGACY-40", minutes=5)
    _raw_case("p1", "TC-7", minutes=1)
    db.session.commit()
    assert SequenceService.next_friendly_id(ItemKind.TEST_CASE.value) == "TC-8"


def test_bulk_counter_reads_once(app):
    _raw_case("p1", "TC-10", minutes=1)
    db.session.commit()
    counter = SequenceService.counter(ItemKind.TEST_CASE.value)
    assert [counter.next() for _ in range(3)] == ["TC-11", "TC-12", "TC-13"]


def test_run_ids_are_scoped_per_project(app, make_user, make_project, identity_for):
    qa = make_user("QA")
    project_a = make_project(qa)
    project_b = make_project(qa)
    case_a = TestCaseService.create({"projectId": project_a.id, "title": "a"}, identity_for(qa))
    case_b = TestCaseService.create({"projectId": project_b.id, "title": "b"}, identity_for(qa))

    run1 = TestRunService.record(case_a, "Pass", qa.id)
    run2 = TestRunService.record(case_a, "Fail", qa.id)
    run3 = TestRunService.record(case_b, "Pass", qa.id)

    assert (run1.run_id, run2.run_id, run3.run_id) == ("RUN-001", "RUN-002", "RUN-001")


def test_repair_keeps_oldest_and_renumbers_rest(app):
    first = _raw_case("p1", "TC-1", minutes=0)
    keep_2 = _raw_case("p1", "TC-2", minutes=1)
    dup_2 = _raw_case("p1", "TC-2", minutes=2)
    keep_3 = _raw_case("p1", "TC-3", minutes=3)
    dup_3 = _raw_case("p1", "TC-3", minutes=4)
    db.session.commit()

    changes = SequenceService.repair_duplicates(ItemKind.TEST_CASE.value)

    assert changes == [(dup_2.id, "TC-2", "TC-4"), (dup_3.id, "TC-3", "TC-5")]
    assert first.friendly_id == "TC-1"
    assert keep_2.friendly_id == "TC-2"
    assert keep_3.friendly_id == "TC-3"
    assert dup_2.friendly_id == "TC-4"
    assert dup_3.friendly_id == "TC-5"


def test_repair_without_duplicates_is_noop(app):
    _raw_case("p1", "TC-1", minutes=0)
    _raw_case("p1", "TC-2", minutes=1)
    db.session.commit()
    assert SequenceService.repair_duplicates(ItemKind.TEST_CASE.value) == []


def test_backfill_assigns_after_latest(app):
    db.session.add(Bug(project_id="p1", title="old", friendly_id="BUG-4",
                       created_at=BASE_TIME + timedelta(minutes=10)))
    missing_a = Bug(project_id="p1", title="a", created_at=BASE_TIME)
    missing_b = Bug(project_id="p1", title="b", created_at=BASE_TIME + timedelta(minutes=1))
    db.session.add_all([missing_b, missing_a])
    db.session.commit()

    changes = SequenceService.backfill(ItemKind.BUG.value)

    assert changes == [(missing_a.id, "BUG-5"), (missing_b.id, "BUG-6")]
