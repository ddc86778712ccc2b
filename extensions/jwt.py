# extensions/jwt.py
"""
HS256 访问令牌：
  - 载荷: sub / username / role / pwdv / iat / exp / jti
  - pwdv 与 User.password_version 对比，改密后旧 token 全部失效
  - 注销时 jti 写入 Redis 黑名单，TTL 为剩余有效期
"""
import base64
import hashlib
import hmac
import json
import time
import uuid

from flask import current_app

from extensions.redis_client import get_redis

BLACKLIST_KEY = "jwt:blk:{jti}"
_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenError(ValueError):
    pass


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _b64decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _encode_json(obj) -> str:
    return _b64encode(json.dumps(obj, separators=(",", ":")).encode())


def _signature(signing_input: str) -> str:
    secret = current_app.config["JWT_SECRET_KEY"].encode()
    return _b64encode(hmac.new(secret, signing_input.encode(), hashlib.sha256).digest())


def create_token(user_id: str, username: str, role: str, pwdv: int, expires_seconds: int = None) -> str:
    if expires_seconds is None:
        expires_seconds = current_app.config["JWT_EXPIRES_SECONDS"]
    issued_at = int(time.time())
    claims = {
        "sub": user_id,
        "username": username,
        "role": role,
        "pwdv": pwdv,
        "iat": issued_at,
        "exp": issued_at + expires_seconds,
        "jti": uuid.uuid4().hex,
    }
    signing_input = f"{_encode_json(_HEADER)}.{_encode_json(claims)}"
    return f"{signing_input}.{_signature(signing_input)}"


def _verified_claims(token: str) -> dict:
    """校验签名与过期时间，不查黑名单"""
    try:
        header_seg, claims_seg, signature = token.split(".")
    except (AttributeError, ValueError):
        raise TokenError("Token is not valid")

    if not hmac.compare_digest(_signature(f"{header_seg}.{claims_seg}"), signature):
        raise TokenError("Token signature mismatch")

    try:
        claims = json.loads(_b64decode(claims_seg).decode())
    except (ValueError, UnicodeDecodeError):
        raise TokenError("Token is not valid")
    if not isinstance(claims, dict):
        raise TokenError("Token is not valid")

    exp = claims.get("exp")
    if exp and time.time() > exp:
        raise TokenError("Token expired")
    return claims


def decode_token(token: str, check_revoked: bool = True) -> dict:
    claims = _verified_claims(token)
    if check_revoked and claims.get("jti") and is_token_revoked(claims["jti"]):
        raise TokenError("Token revoked")
    return claims


def revoke_token(token: str):
    """幂等：无法解析或已过期的 token 直接忽略"""
    try:
        claims = _verified_claims(token)
    except TokenError:
        return
    jti, exp = claims.get("jti"), claims.get("exp")
    if not jti or not exp:
        return
    ttl = max(int(exp) - int(time.time()), 1)
    get_redis().setex(BLACKLIST_KEY.format(jti=jti), ttl, "1")


def is_token_revoked(jti: str) -> bool:
    return bool(get_redis().get(BLACKLIST_KEY.format(jti=jti)))
