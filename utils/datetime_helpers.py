# -*- coding: utf-8 -*-
"""Datetime helpers.

数据库中的 ``datetime`` 一律按 UTC 存储（无时区信息），
接口层统一输出带 ``Z`` 后缀的 ISO 8601 字符串。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """返回 naive UTC 时间（保留微秒，便于按创建时间排序）。"""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def _ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def datetime_to_iso(dt: Optional[datetime]) -> Optional[str]:
    """格式化为 ``2025-01-01T08:00:00.123Z`` 形式，``None`` 原样返回。"""

    if dt is None:
        return None
    value = _ensure_utc(dt)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
