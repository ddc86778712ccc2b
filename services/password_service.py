# services/password_service.py
import logging

from repositories.user_repository import UserRepository
from services.token_service import TokenService
from utils.exceptions import BizError
from utils.password import verify_password, hash_password, validate_password_policy

logger = logging.getLogger(__name__)


class PasswordService:

    @staticmethod
    def change_password(user, current_password: str, new_password: str, current_token: str | None):
        if user is None:
            raise BizError("User not found", 404)
        if not current_password or not new_password:
            raise BizError("Current password and new password are required")

        if not verify_password(user.password_hash, current_password):
            raise BizError("Current password is incorrect")

        policy_errors = validate_password_policy(new_password)
        if policy_errors:
            raise BizError("; ".join(policy_errors))

        if verify_password(user.password_hash, new_password):
            raise BizError("New password must be different from the current password")

        user.password_hash = hash_password(new_password)
        user.bump_password_version()
        UserRepository.commit()
        logger.info("password changed for user %s, version=%s", user.id, user.password_version)

        # 黑名单当前 token；password_version 变化后旧 token 本身也会失效
        if current_token:
            TokenService.revoke(current_token)

        return {
            "message": "Password updated successfully",
            "token": TokenService.issue(user),
        }
