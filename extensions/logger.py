# extensions/logger.py
import os, sys, logging, json, uuid, time
from logging.handlers import RotatingFileHandler
from flask import g, request, has_request_context
from werkzeug.exceptions import HTTPException

from utils.exceptions import BizError
from utils.response import error_response, json_response

_REQUEST_ID_KEY = "request_id"
REQUEST_ID_HEADER = "X-Request-ID"


class JsonFormatter(logging.Formatter):
    def format(self, record):
        data = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "request_id"):
            data["request_id"] = record.request_id
        if hasattr(record, "user_id"):
            data["user_id"] = record.user_id
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


class RequestIdFilter(logging.Filter):
    def filter(self, record):
        if has_request_context():
            record.request_id = getattr(g, _REQUEST_ID_KEY, "-")
        else:
            record.request_id = "-"
        return True


def _ensure_request_id():
    if not hasattr(g, _REQUEST_ID_KEY):
        incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
        setattr(g, _REQUEST_ID_KEY, incoming[:64] or uuid.uuid4().hex)
    return getattr(g, _REQUEST_ID_KEY)


def _configure_root(cfg):
    root = logging.getLogger()
    # 避免重复添加
    if root.handlers and any(getattr(h, "_qa_share", False) for h in root.handlers):
        return

    log_dir = cfg["LOG_DIR"]
    os.makedirs(log_dir, exist_ok=True)
    level = getattr(logging, cfg["LOG_LEVEL"].upper(), logging.INFO)
    root.setLevel(level)

    text_fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(request_id)s | %(name)s | %(message)s",
        "%Y-%m-%d %H:%M:%S"
    )
    fmt = JsonFormatter() if cfg["LOG_JSON"] else text_fmt

    def make_handler(filename, lvl=None):
        h = RotatingFileHandler(
            os.path.join(log_dir, filename),
            maxBytes=cfg["LOG_MAX_BYTES"],
            backupCount=cfg["LOG_BACKUP_COUNT"],
            encoding="utf-8"
        )
        h.setLevel(lvl or level)
        return h

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    for h in (console, make_handler("app.log"), make_handler("error.log", logging.ERROR)):
        h.setFormatter(fmt)
        h.addFilter(RequestIdFilter())
        h._qa_share = True
        root.addHandler(h)

    # 降低 noisy 包
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("botocore").setLevel(logging.WARNING)


def init_logger(app):
    _configure_root(app.config)
    app.logger.info("Logger initialized for %s", app.config.get("APP_NAME"))

    @app.before_request
    def _before():
        g._req_start = time.time()
        _ensure_request_id()
        app.logger.info(f"REQ {request.method} {request.path} from {request.remote_addr}")

    @app.after_request
    def _after(resp):
        duration = (time.time() - getattr(g, "_req_start", time.time())) * 1000
        resp.headers[REQUEST_ID_HEADER] = _ensure_request_id()
        app.logger.info(f"RESP {request.method} {request.path} {resp.status_code} {duration:.1f}ms")
        return resp

    @app.errorhandler(BizError)
    def _biz(e: BizError):
        app.logger.info("BizError %s: %s", e.code, e.message)
        return json_response(e.to_dict(), e.code)

    @app.errorhandler(Exception)
    def _err(e):
        if isinstance(e, HTTPException):
            return error_response(e.description, e.code)
        app.logger.exception("UNHANDLED EXCEPTION")
        return error_response("Server Error", 500)
