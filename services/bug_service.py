import logging

from constants.work_items import BugSeverity, BugStatus, ItemKind, validate_choice, validate_required_text
from models.bug import Bug
from repositories.bug_repository import BugRepository
from services.notification_service import NotificationService
from services.work_item_service import WorkItemService
from utils.exceptions import BizError

logger = logging.getLogger(__name__)


class BugService(WorkItemService):
    repository = BugRepository
    kind = ItemKind.BUG.value
    label = "Bug"
    FIELD_MAP = {
        "title": "title",
        "description": "description",
        "stepsToReproduce": "steps_to_reproduce",
        "testData": "test_data",
        "expectedResult": "expected_result",
        "actualResult": "actual_result",
        "severity": "severity",
        "status": "status",
        "tags": "tags",
        "attachments": "attachments",
    }
    LINK_KEYS = {
        "linkedTestCaseIds": "linked_test_case_ids",
        "linkedTaskIds": "linked_task_ids",
    }

    @classmethod
    def validate(cls, item: Bug):
        validate_required_text("title", item.title)
        validate_choice("severity", item.severity, BugSeverity)
        validate_choice("status", item.status, BugStatus)
        if item.status != BugStatus.DRAFT.value and not (item.steps_to_reproduce or "").strip():
            raise BizError("Steps to reproduce are required unless status is Draft", 400)

    @classmethod
    def after_create(cls, item: Bug, identity):
        NotificationService.notify_bug_created(item)

    @classmethod
    def after_update(cls, item: Bug, before: dict, identity):
        if before.get("status") != item.status:
            logger.info("bug %s status %s -> %s", item.id, before.get("status"), item.status)
            NotificationService.notify_bug_status_changed(item)
