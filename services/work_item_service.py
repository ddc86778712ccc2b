# -*- coding: utf-8 -*-
"""
work_item_service.py
--------------------------------------------------------------------
用例 / 缺陷 / 任务服务的公共流程：
  create: 校验 -> 分配友好编号 -> 去重关联 -> 保存 -> 补反向引用
  update: 取前像 -> 合并字段 -> 再校验 -> 关联 diff 同步
  delete: 撤销所有反向引用 -> 删除
主记录与关联同步在同一事务提交；执行记录、通知等附带操作由子类在提交后处理。
"""

import logging

from models.mixins import new_id
from repositories.project_repository import ProjectRepository
from services.link_service import LinkService
from services.sequence_service import SequenceService
from utils.exceptions import BizError
from utils.payload import as_string_list, pick_fields, require_id

logger = logging.getLogger(__name__)


class WorkItemService:
    repository = None
    kind = ""
    label = "Item"
    # 请求字段 -> 模型属性
    FIELD_MAP: dict = {}
    # 需要转成字符串数组的属性
    LIST_ATTRS = ("tags", "attachments")
    # 关联数组字段 -> 模型属性
    LINK_KEYS: dict = {}

    @classmethod
    def get_or_404(cls, item_id: str):
        item = cls.repository.get_by_id(item_id)
        if not item:
            raise BizError(f"{cls.label} not found", 404)
        return item

    @classmethod
    def list(cls, project_id=None):
        return cls.repository.list(project_id)

    @staticmethod
    def require_project(project_id) -> str:
        project_id = require_id(project_id, "projectId")
        if not ProjectRepository.exists(project_id):
            raise BizError("Project not found", 404)
        return project_id

    @classmethod
    def validate(cls, item):
        raise NotImplementedError

    @classmethod
    def _values(cls, data: dict) -> dict:
        values = pick_fields(data, cls.FIELD_MAP)
        for attr in cls.LIST_ATTRS:
            if attr in values:
                values[attr] = as_string_list(values[attr], attr)
        return values

    @classmethod
    def _apply_links(cls, item, data: dict):
        for key, attr in cls.LINK_KEYS.items():
            if key in data:
                setattr(item, attr, LinkService.dedupe_ids(data[key], key))

    @classmethod
    def build(cls, data: dict, identity, friendly_id: str):
        """构造并加入 session（不提交），关联反向引用同时写入"""
        if not isinstance(data, dict):
            raise BizError("Request body must be a JSON object", 400)
        project_id = cls.require_project(data.get("projectId"))
        item = cls.repository.model(
            id=new_id(),
            project_id=project_id,
            created_by=identity.user_id,
            friendly_id=friendly_id,
        )
        for attr, value in cls._values(data).items():
            setattr(item, attr, value)
        cls._apply_links(item, data)
        cls.before_create(item, data)
        cls.validate(item)
        cls.repository.add(item)
        LinkService.attach(item)
        return item

    @classmethod
    def before_create(cls, item, data: dict):
        """子类钩子：补默认值"""

    @classmethod
    def create(cls, data: dict, identity):
        item = cls.build(data, identity, SequenceService.next_friendly_id(cls.kind))
        cls.repository.commit()
        logger.info("%s created: %s (%s)", cls.kind, item.id, item.friendly_id)
        cls.after_create(item, identity)
        return item

    @classmethod
    def after_create(cls, item, identity):
        """子类钩子：主记录提交后的附带操作"""

    @classmethod
    def update(cls, item_id: str, data: dict, identity):
        if not isinstance(data, dict):
            raise BizError("Request body must be a JSON object", 400)
        item = cls.get_or_404(item_id)
        before_links = item.link_snapshot()
        before = cls.snapshot(item)

        for attr, value in cls._values(data).items():
            setattr(item, attr, value)
        cls._apply_links(item, data)
        cls.before_update(item, data)
        cls.validate(item)
        LinkService.sync(item, before_links)
        cls.repository.commit()

        cls.after_update(item, before, identity)
        return item

    @classmethod
    def snapshot(cls, item) -> dict:
        return {"status": getattr(item, "status", None)}

    @classmethod
    def before_update(cls, item, data: dict):
        """子类钩子：特殊字段处理"""

    @classmethod
    def after_update(cls, item, before: dict, identity):
        """子类钩子：主记录提交后的附带操作"""

    @classmethod
    def remove(cls, item):
        """撤销关联并删除（不提交）"""
        LinkService.detach(item)
        cls.repository.delete(item)

    @classmethod
    def delete(cls, item_id: str):
        item = cls.get_or_404(item_id)
        cls.remove(item)
        cls.repository.commit()
        logger.info("%s deleted: %s", cls.kind, item_id)
