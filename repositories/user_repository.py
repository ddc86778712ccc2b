# repositories/user_repository.py
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from models.user import User
from extensions.database import db


class UserRepository:
    """
    用户仓储（数据访问）层。
    说明：
    - 不做业务规则判断（如密码策略、用户名冲突提示），仅做纯粹的持久化读写。
    - 默认所有写操作不自动 commit，由上层显式调用 commit()，以便在一个事务中组合多个操作。
    """

    @staticmethod
    def find_by_username(username: str) -> Optional[User]:
        if not username:
            return None
        return db.session.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    @staticmethod
    def find_by_id(user_id: str) -> Optional[User]:
        if not user_id:
            return None
        return db.session.get(User, str(user_id))

    @staticmethod
    def find_by_ids(user_ids: Iterable[str]) -> List[User]:
        """批量根据 ID 查询用户。"""
        ids = {str(uid) for uid in user_ids if uid}
        if not ids:
            return []
        return list(db.session.execute(select(User).where(User.id.in_(ids))).scalars())

    @staticmethod
    def get_user_map(user_ids: Iterable[str]) -> Dict[str, User]:
        """返回 {user_id: user}，便于序列化执行人等信息。"""
        return {u.id: u for u in UserRepository.find_by_ids(user_ids)}

    @staticmethod
    def add(user: User):
        db.session.add(user)

    @staticmethod
    def flush():
        db.session.flush()

    @staticmethod
    def commit():
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def rollback():
        db.session.rollback()
