# constants/project.py
"""
项目级默认配置：
  - DEFAULT_PERMISSIONS: DEV 角色在各类工作项上的 查看/创建/编辑 开关
  - DEFAULT_BOARD_SETTINGS: 任务看板列与卡片可见字段
"""

import copy

DEFAULT_PERMISSIONS = {
    "devCanViewTestCases": True,
    "devCanCreateTestCases": False,
    "devCanEditTestCases": False,
    "devCanViewBugs": True,
    "devCanCreateBugs": False,
    "devCanEditBugs": False,
    "devCanEditBugStatusOnly": True,
    "devCanViewNotes": False,
    "devCanViewTasks": True,
    "devCanCreateTasks": False,
    "devCanEditTasks": False,
}

DEFAULT_BOARD_SETTINGS = {
    "columns": [
        {"id": "todo", "title": "To Do", "status": "To Do"},
        {"id": "doing", "title": "Doing", "status": "In Progress"},
        {"id": "done", "title": "Done", "status": "Done"},
    ],
    "visibleFields": {
        "priority": True,
        "tags": True,
        "assignee": True,
        "dueDate": True,
    },
}


def default_permissions() -> dict:
    return dict(DEFAULT_PERMISSIONS)


def default_board_settings() -> dict:
    return copy.deepcopy(DEFAULT_BOARD_SETTINGS)
