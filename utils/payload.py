# -*- coding: utf-8 -*-
"""请求体字段的读取与清洗（camelCase -> 模型属性）"""

from utils.exceptions import BizError


def pick_fields(data: dict, field_map: dict) -> dict:
    """只保留 field_map 中声明的字段，返回 {模型属性: 值}"""
    if not isinstance(data, dict):
        raise BizError("Request body must be a JSON object", 400)
    return {attr: data[key] for key, attr in field_map.items() if key in data}


def as_string_list(value, field: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise BizError(f"{field} must be an array", 400)
    return [str(v) for v in value if v is not None and str(v).strip()]


def as_id_list(value, field: str) -> list:
    """id 列表：统一转字符串并去重，保留首次出现的顺序"""
    seen = []
    for item in as_string_list(value, field):
        if item not in seen:
            seen.append(item)
    return seen


def as_bool(value, field: str) -> bool:
    if not isinstance(value, bool):
        raise BizError(f"{field} must be a boolean", 400)
    return value


def as_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise BizError(f"{field} must be an integer", 400)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BizError(f"{field} must be an integer", 400)


def require_id(value, field: str) -> str:
    if value is None or not str(value).strip():
        raise BizError(f"{field} is required", 400)
    return str(value).strip()
