from __future__ import annotations

from enum import Enum


class MemberRole(str, Enum):
    """
    用户 / 项目成员角色：
    - QA: 测试，维护用例与缺陷
    - DEV: 开发，权限由项目 permissions 开关控制
    """

    QA = "QA"
    DEV = "DEV"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in cls.values()


# 每个项目内各角色成员上限
ROLE_MEMBER_LIMITS: dict[str, int] = {
    MemberRole.QA.value: 3,
    MemberRole.DEV.value: 5,
}

ROLE_LIMIT_MESSAGES: dict[str, str] = {
    MemberRole.QA.value: "Maximum 3 QAs allowed per project",
    MemberRole.DEV.value: "Maximum 5 Developers allowed per project",
}

DEMO_TOKEN_QA = "demo-token-qa"
DEMO_TOKEN_DEV = "demo-token-dev"


def normalize_role(raw: str | None) -> str:
    """
    清洗外部传入的角色值：
    - 去掉首尾空白并转大写
    - 校验是否在已注册角色中
    """
    if not raw or not isinstance(raw, str):
        raise ValueError("role is required")
    value = raw.strip().upper()
    if not MemberRole.has_value(value):
        raise ValueError(f"Invalid role: {raw}")
    return value
