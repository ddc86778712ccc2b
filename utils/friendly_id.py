# -*- coding: utf-8 -*-
"""
友好编号（TC-12 / BUG-3 / TASK-8 / RUN-001）的纯函数部分。
计数器不单独存储，每次由集合中最新的一条记录推算。
"""

from __future__ import annotations

from typing import Iterable, Optional


def parse_friendly_number(friendly_id: Optional[str], prefix: str) -> Optional[int]:
    """"TC-12" -> 12；前缀不符或后缀不是数字时返回 None"""
    if not friendly_id or not isinstance(friendly_id, str):
        return None
    head = f"{prefix}-"
    if not friendly_id.startswith(head):
        return None
    suffix = friendly_id[len(head):]
    if not suffix.isdigit():
        return None
    return int(suffix)


def format_friendly_id(prefix: str, number: int, width: int = 0) -> str:
    if width:
        return f"{prefix}-{number:0{width}d}"
    return f"{prefix}-{number}"


def next_friendly_id(prefix: str, last_friendly_id: Optional[str], width: int = 0) -> str:
    """
    无历史编号 -> <prefix>-1；否则 <prefix>-(n+1)。
    后缀无法解析时按 0 处理，重新从 1 开始。
    """
    last = parse_friendly_number(last_friendly_id, prefix) or 0
    return format_friendly_id(prefix, last + 1, width)


def pick_latest(friendly_ids: Iterable[Optional[str]], prefix: str) -> Optional[str]:
    """创建时间相同的多条记录中，取数字后缀最大的一条"""
    best, best_num = None, -1
    for fid in friendly_ids:
        num = parse_friendly_number(fid, prefix)
        if num is not None and num > best_num:
            best, best_num = fid, num
    return best


def max_friendly_number(friendly_ids: Iterable[Optional[str]], prefix: str) -> int:
    nums = [parse_friendly_number(fid, prefix) for fid in friendly_ids]
    return max([n for n in nums if n is not None], default=0)


class FriendlyIdCounter:
    """批量创建时只读取一次当前编号，之后在本地递增"""

    def __init__(self, prefix: str, last_friendly_id: Optional[str] = None, width: int = 0):
        self.prefix = prefix
        self.width = width
        self.current = parse_friendly_number(last_friendly_id, prefix) or 0

    def next(self) -> str:
        self.current += 1
        return format_friendly_id(self.prefix, self.current, self.width)
