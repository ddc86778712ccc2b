from flask import Blueprint

from utils.datetime_helpers import datetime_to_iso, utcnow
from utils.response import json_response

health_bp = Blueprint("health", __name__, url_prefix="/api/health")


@health_bp.get("")
def health():
    return json_response({"status": "ok", "timestamp": datetime_to_iso(utcnow())})
