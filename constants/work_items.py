# constants/work_items.py
"""
工作项（用例 / 缺陷 / 任务）及其附属实体的枚举集合
统一管理：
  - 用例 TestCase: priority / status
  - 缺陷 Bug: severity / status
  - 任务 Task: status / priority
  - 执行记录 TestRun: status
  - 通知 / 便签类型
提供:
  - Enum 定义 + values()
  - 校验辅助函数，失败抛 BizError(400)
"""

from enum import Enum
from utils.exceptions import BizError


class _ValuesMixin:
    @classmethod
    def values(cls):
        return [m.value for m in cls]


class Priority(_ValuesMixin, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TestCaseStatus(_ValuesMixin, Enum):
    DRAFT = "Draft"
    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    PASS = "Pass"
    FAIL = "Fail"


class BugSeverity(_ValuesMixin, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class BugStatus(_ValuesMixin, Enum):
    DRAFT = "Draft"
    OPENED = "Opened"
    FIXED = "Fixed"
    CLOSED = "Closed"


class TaskStatus(_ValuesMixin, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TestRunStatus(_ValuesMixin, Enum):
    PASS = "Pass"
    FAIL = "Fail"


class NotificationType(_ValuesMixin, Enum):
    BUG_CREATED = "bug_created"
    BUG_STATUS_CHANGED = "bug_status_changed"
    COMMENT_ADDED = "comment_added"


class NoteType(_ValuesMixin, Enum):
    SIMPLE = "simple"
    KV = "kv"


class ItemKind(_ValuesMixin, Enum):
    """工作项类型，同时也是 Task.links[].targetType 的取值"""
    TEST_CASE = "TestCase"
    BUG = "Bug"
    TASK = "Task"


# 友好编号前缀
FRIENDLY_ID_PREFIXES = {
    ItemKind.TEST_CASE.value: "TC",
    ItemKind.BUG.value: "BUG",
    ItemKind.TASK.value: "TASK",
}
RUN_ID_PREFIX = "RUN"
RUN_ID_WIDTH = 3


# -------- 校验辅助函数 --------
def validate_choice(field: str, value, enum_cls):
    if value not in enum_cls.values():
        raise BizError(f"{field} must be one of {enum_cls.values()}", 400)
    return value


def validate_required_text(field: str, value):
    if value is None or not isinstance(value, str) or not value.strip():
        raise BizError(f"{field} is required", 400)
    return value
