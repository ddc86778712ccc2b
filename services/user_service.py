# services/user_service.py
import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError

from constants.roles import MemberRole, normalize_role
from models.mixins import new_id
from models.user import User
from repositories.user_repository import UserRepository
from services.token_service import TokenService
from utils.exceptions import BizError
from utils.password import hash_password, verify_password, validate_password_policy

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def _clean(value) -> str:
        return value.strip() if isinstance(value, str) else ""

    @staticmethod
    def _auth_payload(user: User) -> dict:
        return {"token": TokenService.issue(user), "user": user.to_public_dict()}

    @staticmethod
    def build_user(name: str, username: str, password: str, role: str) -> User:
        """构造（未提交的）用户，角色与密码在此统一校验"""
        try:
            role_value = normalize_role(role)
        except ValueError as e:
            raise BizError(str(e), 400)
        errors = validate_password_policy(password)
        if errors:
            raise BizError("; ".join(errors), 400)
        user = User(
            id=new_id(),
            name=name,
            username=username,
            password_hash=hash_password(password),
            role=role_value,
            password_version=1,
        )
        UserRepository.add(user)
        return user

    @staticmethod
    def register(name, username, password, role) -> dict:
        name = UserService._clean(name)
        username = UserService._clean(username)
        if not name or not username or not password:
            raise BizError("Name, username and password are required", 400)
        if UserRepository.find_by_username(username):
            raise BizError("User already exists", 400)

        user = UserService.build_user(name, username, password, role or MemberRole.QA.value)
        try:
            UserRepository.commit()
        except IntegrityError:
            raise BizError("User already exists", 400)
        logger.info("user registered: %s (%s)", user.username, user.role)
        return UserService._auth_payload(user)

    @staticmethod
    def authenticate(username, password) -> dict:
        username = UserService._clean(username)
        user = UserRepository.find_by_username(username)
        if not user or not verify_password(user.password_hash, password):
            raise BizError("Invalid Credentials", 400)
        return UserService._auth_payload(user)

    @staticmethod
    def update_profile(user: User, name=None, username=None) -> User:
        if user is None:
            raise BizError("User not found", 404)
        # 空值视为不修改
        name = UserService._clean(name)
        username = UserService._clean(username)
        if username and username != user.username:
            owner = UserRepository.find_by_username(username)
            if owner and owner.id != user.id:
                raise BizError("Username already taken", 400)
            user.username = username
        if name:
            user.name = name
        try:
            UserRepository.commit()
        except IntegrityError:
            raise BizError("Username already taken", 400)
        return user

    @staticmethod
    def find_or_create(name: str, username: str, password, role: str) -> User:
        """添加项目成员时按用户名查找，不存在则创建（不提交）"""
        user = UserRepository.find_by_username(username)
        if user:
            return user
        if not password:
            raise BizError("Password is required for a new user", 400)
        user = UserService.build_user(name, username, password, role)
        logger.info("user %s created while adding project member", username)
        return user

    @staticmethod
    def ensure_demo_users(app):
        """按固定 id 预置 QA / DEV 演示账号，与演示 token 对应"""
        cfg = app.config
        demo = (
            (cfg["DEMO_QA_USER_ID"], "Demo QA", "demo-qa", MemberRole.QA.value),
            (cfg["DEMO_DEV_USER_ID"], "Demo Developer", "demo-dev", MemberRole.DEV.value),
        )
        created = False
        for user_id, name, username, role in demo:
            if UserRepository.find_by_id(user_id) or UserRepository.find_by_username(username):
                continue
            UserRepository.add(User(
                id=user_id,
                name=name,
                username=username,
                password_hash=hash_password(cfg["DEMO_PASSWORD"]),
                role=role,
                password_version=1,
            ))
            created = True
        if created:
            UserRepository.commit()
            app.logger.info("Demo users created")
