# -*- coding: utf-8 -*-
"""
work_item_repository.py
--------------------------------------------------------------------
用例 / 缺陷 / 任务共用的数据访问：
- 按 id 批量读取（关联同步）
- 最新友好编号查询（编号分配）
- 反向引用扫描（删除级联）
子类只需指定 model。
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import select, func, String, cast
from sqlalchemy.exc import IntegrityError

from extensions.database import db


class WorkItemRepository:
    model = None

    @classmethod
    def add(cls, item):
        db.session.add(item)
        return item

    @classmethod
    def delete(cls, item):
        db.session.delete(item)

    @classmethod
    def get_by_id(cls, item_id: str):
        if not item_id:
            return None
        return db.session.get(cls.model, str(item_id))

    @classmethod
    def find_by_ids(cls, item_ids: Iterable[str]) -> List:
        ids = {str(i) for i in item_ids if i}
        if not ids:
            return []
        stmt = select(cls.model).where(cls.model.id.in_(ids))
        return list(db.session.execute(stmt).scalars())

    @classmethod
    def list(cls, project_id: Optional[str] = None) -> List:
        stmt = select(cls.model)
        if project_id:
            stmt = stmt.where(cls.model.project_id == str(project_id))
        stmt = stmt.order_by(cls.model.created_at.desc())
        return list(db.session.execute(stmt).scalars())

    @classmethod
    def latest_friendly_ids(cls, prefix: str) -> List[str]:
        """
        创建时间最新的、friendly_id 以 "<prefix>-" 开头的记录编号。
        同一时间戳可能有多条，全部返回，由调用方按数字后缀取最大。
        """
        model = cls.model
        pattern = f"{prefix}-%"
        newest = (
            select(func.max(model.created_at))
            .where(model.friendly_id.like(pattern))
            .scalar_subquery()
        )
        stmt = select(model.friendly_id).where(
            model.friendly_id.like(pattern),
            model.created_at == newest,
        )
        return [fid for fid in db.session.execute(stmt).scalars() if fid]

    @classmethod
    def all_with_friendly_id(cls, prefix: str) -> List:
        """按创建时间升序返回所有带编号的记录（重复编号修复）"""
        stmt = (
            select(cls.model)
            .where(cls.model.friendly_id.like(f"{prefix}-%"))
            .order_by(cls.model.created_at.asc(), cls.model.id.asc())
        )
        return list(db.session.execute(stmt).scalars())

    @classmethod
    def without_friendly_id(cls) -> List:
        stmt = (
            select(cls.model)
            .where((cls.model.friendly_id.is_(None)) | (cls.model.friendly_id == ""))
            .order_by(cls.model.created_at.asc(), cls.model.id.asc())
        )
        return list(db.session.execute(stmt).scalars())

    @classmethod
    def find_referencing(cls, peer_kind: str, peer_id: str) -> List:
        """
        扫描反向字段中包含 peer_id 的记录。
        JSON 列先按文本粗筛，再由模型方法精确确认。
        """
        field = cls.model.LINK_FIELDS.get(peer_kind)
        if not field or not peer_id:
            return []
        column = getattr(cls.model, field)
        stmt = select(cls.model).where(cast(column, String).like(f"%{peer_id}%"))
        return [
            item for item in db.session.execute(stmt).scalars()
            if str(peer_id) in item.linked_ids(peer_kind)
        ]

    @staticmethod
    def flush():
        db.session.flush()

    @staticmethod
    def commit():
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def rollback():
        db.session.rollback()
