# app.py
import click
from flask import Flask
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError

from config.settings import get_config
from constants.work_items import ItemKind
from extensions.database import db, migrate
from extensions.logger import init_logger
from controllers.auth_controller import auth_bp
from controllers.project_controller import project_bp
from controllers.test_case_controller import test_case_bp
from controllers.bug_controller import bug_bp
from controllers.task_controller import task_bp
from controllers.test_run_controller import test_run_bp
from controllers.comment_controller import comment_bp
from controllers.notification_controller import notification_bp
from controllers.note_controller import note_bp
from controllers.upload_controller import upload_bp
from controllers.health_controller import health_bp
from services.sequence_service import SequenceService
from services.user_service import UserService

import models  # noqa: F401  注册全部模型

KIND_OPTIONS = {
    "test-case": [ItemKind.TEST_CASE.value],
    "bug": [ItemKind.BUG.value],
    "task": [ItemKind.TASK.value],
    "all": [k.value for k in ItemKind],
}


def register_commands(app):
    @app.cli.command("repair-friendly-ids")
    @click.option("--kind", type=click.Choice(list(KIND_OPTIONS)), default="all")
    def repair_friendly_ids(kind):
        """重复编号修复：保留最早的一条，其余重新编号"""
        for item_kind in KIND_OPTIONS[kind]:
            changes = SequenceService.repair_duplicates(item_kind)
            for item_id, old, new in changes:
                click.echo(f"{item_kind} {item_id}: {old} -> {new}")
            click.echo(f"{item_kind}: {len(changes)} renumbered")

    @app.cli.command("backfill-friendly-ids")
    @click.option("--kind", type=click.Choice(list(KIND_OPTIONS)), default="all")
    def backfill_friendly_ids(kind):
        """为缺少编号的历史记录补齐编号"""
        for item_kind in KIND_OPTIONS[kind]:
            changes = SequenceService.backfill(item_kind)
            for item_id, fid in changes:
                click.echo(f"{item_kind} {item_id}: {fid}")
            click.echo(f"{item_kind}: {len(changes)} assigned")


def create_app(config_name="development"):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    init_logger(app)
    CORS(app, origins=[o.strip() for o in app.config["CORS_ORIGINS"].split(",") if o.strip()])
    app.logger.info("Database URI: %s", app.config["SQLALCHEMY_DATABASE_URI"])

    with app.app_context():
        if app.config.get("AUTO_CREATE_TABLES"):
            db.create_all()
        if app.config.get("SEED_DEMO_USERS"):
            try:
                UserService.ensure_demo_users(app)
            except SQLAlchemyError as e:
                # 表结构尚未迁移时跳过，upgrade 之后重启即可
                db.session.rollback()
                app.logger.warning("Demo users not seeded: %s", e)

    app.register_blueprint(auth_bp)
    app.register_blueprint(project_bp)
    app.register_blueprint(test_case_bp)
    app.register_blueprint(bug_bp)
    app.register_blueprint(task_bp)
    app.register_blueprint(test_run_bp)
    app.register_blueprint(comment_bp)
    app.register_blueprint(notification_bp)
    app.register_blueprint(note_bp)
    app.register_blueprint(upload_bp)
    app.register_blueprint(health_bp)

    register_commands(app)
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=True)
