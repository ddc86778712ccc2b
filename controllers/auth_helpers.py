# controllers/auth_helpers.py
from functools import wraps

from flask import g, request

from middlewares.auth import extract_bearer, resolve_identity


def auth_required():
    """
    鉴权装饰器：
      - 验证 Authorization: Bearer <token>（含两个演示 token）
      - 注入 g.current_identity / g.current_user
      - 失败由 BizError(401) 交给 errorhandler
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.current_identity = None
            g.current_user = None
            identity = resolve_identity(extract_bearer(request.headers.get("Authorization")))
            g.current_identity = identity
            g.current_user = identity.user
            return fn(*args, **kwargs)

        return wrapper

    return decorator
