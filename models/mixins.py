# models/mixins.py
import uuid

from sqlalchemy import DateTime
from extensions.database import db
from utils.datetime_helpers import utcnow, datetime_to_iso

COMMON_TABLE_ARGS = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}


def new_id() -> str:
    return uuid.uuid4().hex


class DocumentMixin:
    """
    文档型主键 + 创建时间：
    - id 使用 uuid4 hex 字符串，外部引用统一按字符串比较
    - created_at 由应用层写入（保留微秒），友好编号依赖它排序
    """
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    created_at = db.Column(DateTime, nullable=False, default=utcnow, index=True)

    def __init__(self, **kwargs):
        # 构造时即填充列默认值，未 flush 的对象同样可用
        for column in self.__table__.columns:
            default = column.default
            if default is None or column.key in kwargs:
                continue
            if default.is_scalar:
                kwargs[column.key] = default.arg
            elif default.is_callable:
                kwargs[column.key] = default.arg(None)
        super().__init__(**kwargs)

    def _base_dict(self) -> dict:
        return {
            "id": self.id,
            "_id": self.id,
            "createdAt": datetime_to_iso(self.created_at),
        }


class LinkedItemMixin:
    """
    工作项之间的双向关联：
    - LINK_FIELDS: {对端类型: 存放对端 id 列表的 JSON 字段}
    - 列表整体重新赋值，保证 JSON 列的变更能被 session 追踪
    """
    KIND: str = ""
    LINK_FIELDS: dict = {}

    def linked_ids(self, kind: str) -> list:
        field = self.LINK_FIELDS.get(kind)
        if not field:
            return []
        return [str(i) for i in (getattr(self, field) or [])]

    def link_snapshot(self) -> dict:
        return {kind: set(self.linked_ids(kind)) for kind in self.LINK_FIELDS}

    def add_link(self, kind: str, item_id: str) -> bool:
        ids = self.linked_ids(kind)
        if item_id in ids:
            return False
        setattr(self, self.LINK_FIELDS[kind], ids + [item_id])
        return True

    def remove_link(self, kind: str, item_id: str) -> bool:
        ids = self.linked_ids(kind)
        if item_id not in ids:
            return False
        setattr(self, self.LINK_FIELDS[kind], [i for i in ids if i != item_id])
        return True

    def retain_links(self, kind: str, allowed_ids) -> None:
        allowed = set(allowed_ids)
        setattr(
            self,
            self.LINK_FIELDS[kind],
            [i for i in self.linked_ids(kind) if i in allowed],
        )

    def clear_links(self, kind: str) -> None:
        setattr(self, self.LINK_FIELDS[kind], [])
