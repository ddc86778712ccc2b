# services/token_service.py
from extensions.jwt import create_token, revoke_token


class TokenService:
    @staticmethod
    def revoke(token: str):
        """写入黑名单，TTL 为 token 剩余有效期；演示 token 不可解析，直接忽略"""
        if not token:
            return
        revoke_token(token)

    @staticmethod
    def issue(user):
        return create_token(user.id, user.username, user.role, user.password_version)
