import uuid

import pytest

from app import create_app
from extensions import object_storage, redis_client
from extensions.database import db
from extensions.jwt import create_token
from models import User
from services.project_service import ProjectService
from services.user_service import UserService
from utils.permissions import Identity


class FakeRedis:
    """只实现 token 黑名单用到的 setex / get"""

    def __init__(self):
        self.store = {}

    def setex(self, key, ttl, value):
        self.store[key] = (value, ttl)

    def get(self, key):
        item = self.store.get(key)
        return item[0] if item else None


class FakeS3:
    def __init__(self):
        self.objects = {}
        self.deleted = []

    def put_object(self, Bucket, Key, Body, ContentType=None):
        self.objects[(Bucket, Key)] = (Body, ContentType)
        return {"ETag": '"fake"'}

    def delete_object(self, Bucket, Key):
        self.deleted.append((Bucket, Key))
        self.objects.pop((Bucket, Key), None)
        return {}


@pytest.fixture()
def fake_redis():
    fake = FakeRedis()
    redis_client.reset_redis(fake)
    yield fake
    redis_client.reset_redis(None)


@pytest.fixture()
def fake_s3():
    fake = FakeS3()
    object_storage.reset_s3_client(fake)
    yield fake
    object_storage.reset_s3_client(None)


@pytest.fixture()
def app(fake_redis):
    """测试用 Flask 应用（内存数据库），每个用例重新建表"""
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def _unique(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


@pytest.fixture()
def make_user(app):
    """直接落库一个用户，返回 User"""
    def _create(role="QA", name=None, username=None, password="secret123") -> User:
        user = UserService.build_user(
            name or _unique("Name"),
            username or _unique("user"),
            password,
            role,
        )
        db.session.commit()
        return user
    return _create


@pytest.fixture()
def identity_for():
    def _identity(user: User) -> Identity:
        return Identity(user_id=user.id, role=user.role, user=user)
    return _identity


@pytest.fixture()
def auth_headers(app):
    def _headers(user: User) -> dict:
        token = create_token(user.id, user.username, user.role, user.password_version)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture()
def make_project(app, identity_for):
    """
    创建项目；members 为 [(User, role), ...]，
    成员按给定顺序写入并关联已存在的用户。
    """
    def _create(owner: User, members=None, name=None):
        payload = {
            "name": name or _unique("Project"),
            "members": [
                {"name": u.name, "username": u.username, "role": role}
                for u, role in (members or [])
            ],
        }
        return ProjectService.create(payload, identity_for(owner))
    return _create
