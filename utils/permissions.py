from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import g

from utils.exceptions import BizError


@dataclass
class Identity:
    """
    当前请求的调用者：
      - user_id / role 来自 token 或演示 token
      - user 为数据库中的 User（演示身份未落库时为 None）
      - token 为原始 bearer，注销 / 改密时用于吊销
    """
    user_id: str
    role: str
    user: Optional[object] = None
    token: Optional[str] = None
    is_demo: bool = False

    @property
    def name(self) -> Optional[str]:
        return getattr(self.user, "name", None)


def get_current_identity(required: bool = True) -> Optional[Identity]:
    identity = getattr(g, "current_identity", None)
    if identity is None and required:
        raise BizError("Unauthorized", 401)
    return identity
