# extensions/object_storage.py
import boto3
from botocore.config import Config
from flask import current_app

_s3_client = None


def create_s3_client(cfg):
    session = boto3.session.Session(
        aws_access_key_id=cfg.get("AWS_ACCESS_KEY"),
        aws_secret_access_key=cfg.get("AWS_SECRET_KEY"),
        region_name=cfg.get("AWS_REGION_NAME", "us-east-1"),
    )

    s3_cfg = Config(
        signature_version=cfg.get("AWS_SIGNATURE_VERSION", "s3v4"),
        s3={
            "addressing_style": "path",
            "use_accelerate_endpoint": False,
            "payload_signing_enabled": True,
        }
    )

    return session.client("s3", endpoint_url=cfg.get("AWS_ENDPOINT_URL"), config=s3_cfg)


def get_s3_client():
    global _s3_client
    if _s3_client is None:
        _s3_client = create_s3_client(current_app.config)
    return _s3_client


def reset_s3_client(client=None):
    """替换 / 清空缓存的客户端（测试中注入假实现）"""
    global _s3_client
    _s3_client = client


def public_url(key: str) -> str:
    cfg = current_app.config
    base = cfg.get("S3_PUBLIC_BASE_URL")
    if not base:
        endpoint = (cfg.get("AWS_ENDPOINT_URL") or "https://s3.amazonaws.com").rstrip("/")
        base = f"{endpoint}/{cfg['S3_BUCKET']}"
    return f"{base.rstrip('/')}/{key}"


def put_object(key: str, body: bytes, content_type: str):
    return get_s3_client().put_object(
        Bucket=current_app.config["S3_BUCKET"],
        Key=key,
        Body=body,
        ContentType=content_type,
    )


def delete_object(key: str):
    return get_s3_client().delete_object(Bucket=current_app.config["S3_BUCKET"], Key=key)
