# -*- coding: utf-8 -*-
"""
task_service.py
--------------------------------------------------------------------
看板任务：
- 列表必须指定项目，按 order 升序
- 新任务默认排在项目末尾
- parentId 指向同项目内的另一任务，不允许成环
- 删除任务时子任务仅清空 parentId
"""

import logging

from constants.work_items import ItemKind, Priority, TaskStatus, validate_choice, validate_required_text
from models.task import Task
from repositories.task_repository import TaskRepository
from services.link_service import LinkService
from services.work_item_service import WorkItemService
from utils.exceptions import BizError
from utils.payload import as_int

logger = logging.getLogger(__name__)


class TaskService(WorkItemService):
    repository = TaskRepository
    kind = ItemKind.TASK.value
    label = "Task"
    FIELD_MAP = {
        "title": "title",
        "description": "description",
        "status": "status",
        "priority": "priority",
        "tags": "tags",
        "additionalInfo": "additional_info",
        "attachments": "attachments",
        "assignedTo": "assigned_to",
        "reporter": "reporter",
    }

    @classmethod
    def list(cls, project_id=None):
        if not project_id:
            raise BizError("Project ID is required", 400)
        return TaskRepository.list(project_id)

    @classmethod
    def validate(cls, item: Task):
        validate_required_text("title", item.title)
        validate_choice("status", item.status, TaskStatus)
        validate_choice("priority", item.priority, Priority)

    @staticmethod
    def _check_parent(item: Task, parent_id):
        if parent_id in (None, ""):
            return None
        parent_id = str(parent_id)
        if parent_id == item.id:
            raise BizError("A task cannot be its own parent", 400)
        parent = TaskRepository.get_by_id(parent_id)
        if not parent or parent.project_id != item.project_id:
            raise BizError("Parent task not found", 400)
        # 沿父链向上，确认不会回到自身
        seen = {item.id}
        cursor = parent
        while cursor is not None and cursor.parent_id:
            if cursor.parent_id in seen:
                raise BizError("Parent task would create a cycle", 400)
            seen.add(cursor.id)
            cursor = TaskRepository.get_by_id(cursor.parent_id)
        return parent_id

    @classmethod
    def _apply_special(cls, item: Task, data: dict):
        if "links" in data:
            item.links = LinkService.normalize_task_links(data["links"])
        if "parentId" in data:
            item.parent_id = cls._check_parent(item, data["parentId"])
        if "order" in data:
            item.order = as_int(data["order"], "order")

    @classmethod
    def before_create(cls, item: Task, data: dict):
        cls._apply_special(item, data)
        if "order" not in data:
            current = TaskRepository.max_order(item.project_id)
            item.order = 0 if current is None else current + 1

    @classmethod
    def before_update(cls, item: Task, data: dict):
        cls._apply_special(item, data)

    @classmethod
    def remove(cls, item: Task):
        for child in TaskRepository.children_of(item.id):
            child.parent_id = None
        super().remove(item)
