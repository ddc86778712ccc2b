# extensions/redis_client.py
import redis
from flask import current_app, has_app_context

DEFAULT_REDIS_URL = "redis://127.0.0.1:6379/0"

_redis_client = None


def get_redis():
    global _redis_client
    if _redis_client is not None:
        return _redis_client
    url = DEFAULT_REDIS_URL
    if has_app_context():
        url = current_app.config.get("REDIS_URL") or DEFAULT_REDIS_URL
    _redis_client = redis.from_url(url)
    return _redis_client


def reset_redis(client=None):
    """替换 / 清空缓存的客户端（测试中注入假实现）"""
    global _redis_client
    _redis_client = client
