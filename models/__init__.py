# -*- coding: utf-8 -*-
"""
__init__.py
--------------------------------------------------------------------
汇总导入所有模型，使得：
- Flask-Migrate/Alembic 自动检测模型。
- 外部模块可简化引用：from models import TestCase, Bug
注意：
- 避免循环导入：各模型仅在这里集中 import。
"""

from .mixins import DocumentMixin, LinkedItemMixin
from .user import User
from .project import Project, ProjectMember
from .test_case import TestCase
from .bug import Bug
from .task import Task
from .test_run import TestRun
from .comment import Comment
from .notification import Notification
from .note import Note

__all__ = [
    "DocumentMixin", "LinkedItemMixin",
    "User", "Project", "ProjectMember",
    "TestCase", "Bug", "Task", "TestRun",
    "Comment", "Notification", "Note",
]
