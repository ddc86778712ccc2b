# config/settings.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
load_dotenv(os.path.join(BASE_DIR, ".env"))  # 自动加载环境变量


def _as_bool(val, default=False):
    if val is None:
        return default
    return str(val).lower() in ("1", "true", "yes", "on")


def _as_list(val, default):
    if not val:
        return list(default)
    return [item.strip() for item in val.split(",") if item.strip()]


DEFAULT_ALLOWED_MIME_TYPES = (
    # 图片
    "image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp",
    # 视频
    "video/mp4", "video/webm", "video/quicktime",
    # 文档
    "application/pdf", "text/plain",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False

    # ========= Token =========
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-secret-key")
    # 默认 30 天
    JWT_EXPIRES_SECONDS = int(os.getenv("JWT_EXPIRES_SECONDS", 30 * 24 * 3600))
    REDIS_URL = os.getenv("REDIS_URL", "redis://127.0.0.1:6379/0")

    # 演示账号：固定 token 直接映射到固定身份
    DEMO_TOKENS_ENABLED = _as_bool(os.getenv("DEMO_TOKENS_ENABLED", "1"), True)
    DEMO_QA_USER_ID = os.getenv("DEMO_QA_USER_ID", "673ffa1234567890abcdef01")
    DEMO_DEV_USER_ID = os.getenv("DEMO_DEV_USER_ID", "673ffa1234567890abcdef02")
    SEED_DEMO_USERS = _as_bool(os.getenv("SEED_DEMO_USERS", "1"), True)
    DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "demo123")

    PASSWORD_MIN_LENGTH = int(os.getenv("PASSWORD_MIN_LENGTH", 6))

    # ========= 对象存储 (S3 兼容) =========
    AWS_ACCESS_KEY = os.getenv("AWS_ACCESS_KEY")
    AWS_SECRET_KEY = os.getenv("AWS_SECRET_KEY")
    AWS_ENDPOINT_URL = os.getenv("AWS_ENDPOINT_URL")
    AWS_REGION_NAME = os.getenv("AWS_REGION_NAME", "us-east-1")
    AWS_SIGNATURE_VERSION = os.getenv("AWS_SIGNATURE_VERSION", "s3v4")
    S3_BUCKET = os.getenv("S3_BUCKET", "qa-share")
    # 为空时根据 endpoint + bucket 拼接访问地址
    S3_PUBLIC_BASE_URL = os.getenv("S3_PUBLIC_BASE_URL")

    # ========= 上传 =========
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "qa-share/attachments")
    UPLOAD_MAX_BYTES = int(os.getenv("UPLOAD_MAX_BYTES", 50 * 1024 * 1024))
    UPLOAD_ALLOWED_MIME_TYPES = _as_list(
        os.getenv("UPLOAD_ALLOWED_MIME_TYPES"), DEFAULT_ALLOWED_MIME_TYPES
    )
    # 留出 multipart 包头的余量，精确大小校验在上传服务里做
    MAX_CONTENT_LENGTH = UPLOAD_MAX_BYTES + 1024 * 1024

    CORS_ORIGINS = os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
    )

    # 日志相关
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "./logs")
    LOG_JSON = os.getenv("LOG_JSON", "1") == "1"  # 是否 JSON 格式
    LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", 5 * 1024 * 1024))
    LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", 5))
    APP_NAME = os.getenv("APP_NAME", "qa-share")

    # 无迁移目录时（本地开发）直接建表
    AUTO_CREATE_TABLES = _as_bool(os.getenv("AUTO_CREATE_TABLES"), False)


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    AUTO_CREATE_TABLES = _as_bool(os.getenv("AUTO_CREATE_TABLES", "1"), True)
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DEV_DATABASE_URI", "sqlite:///" + os.path.join(BASE_DIR, "qa_share.db")
    )


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")
    DEMO_TOKENS_ENABLED = _as_bool(os.getenv("DEMO_TOKENS_ENABLED", "0"), False)


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")
    SEED_DEMO_USERS = False
    LOG_DIR = os.getenv("TEST_LOG_DIR", os.path.join(BASE_DIR, "logs", "test"))
    LOG_JSON = False
    S3_PUBLIC_BASE_URL = "https://files.example.test"


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name):
    return config_map.get(config_name, DevelopmentConfig)
