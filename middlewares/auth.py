# middlewares/auth.py
import logging

from flask import current_app

from constants.roles import DEMO_TOKEN_QA, DEMO_TOKEN_DEV, MemberRole
from extensions.jwt import decode_token, TokenError
from repositories.user_repository import UserRepository
from utils.exceptions import BizError
from utils.permissions import Identity

logger = logging.getLogger(__name__)


def extract_bearer(auth_header):
    if not auth_header:
        return None
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        return token or None
    return None


def _demo_identity(token: str):
    cfg = current_app.config
    if not cfg.get("DEMO_TOKENS_ENABLED"):
        return None
    mapping = {
        DEMO_TOKEN_QA: (cfg["DEMO_QA_USER_ID"], MemberRole.QA.value),
        DEMO_TOKEN_DEV: (cfg["DEMO_DEV_USER_ID"], MemberRole.DEV.value),
    }
    if token not in mapping:
        return None
    user_id, role = mapping[token]
    return Identity(
        user_id=user_id,
        role=role,
        user=UserRepository.find_by_id(user_id),
        token=token,
        is_demo=True,
    )


def resolve_identity(token: str) -> Identity:
    """
    bearer -> Identity，失败统一抛 401：
      1. 演示 token 直接映射固定身份
      2. 普通 token 校验签名 / 过期 / 黑名单
      3. 用户必须存在且 password_version 一致
    """
    if not token:
        raise BizError("No token, authorization denied", 401)

    demo = _demo_identity(token)
    if demo is not None:
        return demo

    try:
        payload = decode_token(token)
    except TokenError as e:
        logger.info("token rejected: %s", e)
        raise BizError("Token is not valid", 401)

    user_id = payload.get("sub")
    if not user_id:
        raise BizError("Token is not valid", 401)
    user = UserRepository.find_by_id(str(user_id))
    if not user:
        raise BizError("Token is not valid", 401)
    if payload.get("pwdv") != user.password_version:
        raise BizError("Session expired, please log in again", 401)

    return Identity(user_id=user.id, role=user.role, user=user, token=token)
