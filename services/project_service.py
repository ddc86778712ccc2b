import logging
from typing import List

from flask import current_app
from sqlalchemy.orm.attributes import flag_modified

from constants.project import DEFAULT_PERMISSIONS, default_permissions, default_board_settings
from constants.roles import ROLE_MEMBER_LIMITS, ROLE_LIMIT_MESSAGES, normalize_role
from constants.work_items import TaskStatus
from models.mixins import new_id
from models.project import Project, ProjectMember
from repositories.project_repository import ProjectRepository
from repositories.user_repository import UserRepository
from services.user_service import UserService
from utils.datetime_helpers import utcnow
from utils.exceptions import BizError
from utils.permissions import Identity

logger = logging.getLogger(__name__)


class ProjectService:

    @staticmethod
    def get_or_404(project_id: str) -> Project:
        project = ProjectRepository.get_by_id(project_id)
        if not project:
            raise BizError("Project not found", 404)
        return project

    @staticmethod
    def list_projects() -> List[Project]:
        return ProjectRepository.list_all()

    # ---------- 成员 ----------
    @staticmethod
    def _check_role_limit(project: Project, role: str):
        if project.member_count(role) >= ROLE_MEMBER_LIMITS[role]:
            raise BizError(ROLE_LIMIT_MESSAGES[role], 400)

    @staticmethod
    def _append_member(project: Project, user, name, username, role, password=None) -> ProjectMember:
        ProjectService._check_role_limit(project, role)
        member = ProjectMember(
            id=new_id(),
            user_id=user.id if user else None,
            name=name,
            username=username,
            password=password or "",
            role=role,
            position=len(project.members),
            created_at=utcnow(),
        )
        project.members.append(member)
        return member

    @staticmethod
    def _member_fields(data) -> tuple:
        if not isinstance(data, dict):
            raise BizError("Member must be an object", 400)
        name, username = data.get("name"), data.get("username")
        name = name.strip() if isinstance(name, str) else ""
        username = username.strip() if isinstance(username, str) else ""
        if not name or not username:
            raise BizError("Name and username are required", 400)
        try:
            role = normalize_role(data.get("role"))
        except ValueError as e:
            raise BizError(str(e), 400)
        return name, username, role

    @staticmethod
    def add_member(project_id: str, data: dict) -> Project:
        """
        添加成员：
          1. 按 username 查找用户，不存在则创建（需要 password）
          2. 同一项目内 username 不可重复
          3. QA <= 3，DEV <= 5
          4. 写入成员快照（含明文密码，仅用于展示）
        """
        name, username, role = ProjectService._member_fields(data)
        project = ProjectService.get_or_404(project_id)
        if project.find_member_by_username(username):
            raise BizError("Member already exists in this project", 400)
        ProjectService._check_role_limit(project, role)

        user = UserService.find_or_create(name, username, data.get("password"), role)
        ProjectService._append_member(project, user, name, username, role, data.get("password"))
        ProjectRepository.commit()
        logger.info("project %s: member %s added as %s", project.id, username, role)
        return project

    @staticmethod
    def remove_member(project_id: str, member_id: str) -> Project:
        project = ProjectService.get_or_404(project_id)
        member = next((m for m in project.members if m.id == str(member_id)), None)
        if not member:
            raise BizError("Member not found", 404)
        project.members.remove(member)
        for idx, m in enumerate(project.members):
            m.position = idx
        ProjectRepository.commit()
        logger.info("project %s: member %s removed", project.id, member.username)
        return project

    # ---------- 配置 ----------
    @staticmethod
    def validate_permissions(payload, base=None) -> dict:
        if not isinstance(payload, dict):
            raise BizError("permissions must be an object", 400)
        merged = dict(base or default_permissions())
        for key, value in payload.items():
            if key not in DEFAULT_PERMISSIONS:
                raise BizError(f"Unknown permission: {key}", 400)
            if not isinstance(value, bool):
                raise BizError(f"Permission {key} must be a boolean", 400)
            merged[key] = value
        return merged

    @staticmethod
    def validate_board_settings(payload, base=None) -> dict:
        if not isinstance(payload, dict):
            raise BizError("taskBoardSettings must be an object", 400)
        settings = dict(base or default_board_settings())

        if "columns" in payload:
            columns = payload["columns"]
            if not isinstance(columns, list) or not columns:
                raise BizError("columns must be a non-empty array", 400)
            cleaned, seen = [], set()
            for col in columns:
                if not isinstance(col, dict):
                    raise BizError("column must be an object", 400)
                col_id, title, status = col.get("id"), col.get("title"), col.get("status")
                if not col_id or not isinstance(title, str) or not title.strip():
                    raise BizError("column id and title are required", 400)
                if status not in TaskStatus.values():
                    raise BizError(f"column status must be one of {TaskStatus.values()}", 400)
                if str(col_id) in seen:
                    raise BizError(f"Duplicate column id: {col_id}", 400)
                seen.add(str(col_id))
                cleaned.append({"id": str(col_id), "title": title.strip(), "status": status})
            settings["columns"] = cleaned

        if "visibleFields" in payload:
            fields = payload["visibleFields"]
            if not isinstance(fields, dict):
                raise BizError("visibleFields must be an object", 400)
            visible = dict(settings.get("visibleFields") or {})
            for key, value in fields.items():
                if not isinstance(value, bool):
                    raise BizError(f"visibleFields.{key} must be a boolean", 400)
                visible[key] = value
            settings["visibleFields"] = visible
        return settings

    # ---------- 项目 ----------
    @staticmethod
    def create(data: dict, identity: Identity) -> Project:
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise BizError("Project name is required", 400)

        project = Project(
            id=new_id(),
            name=name.strip(),
            description=data.get("description"),
            created_by=identity.user_id,
            permissions=ProjectService.validate_permissions(data.get("permissions") or {}),
            task_board_settings=ProjectService.validate_board_settings(data.get("taskBoardSettings") or {}),
        )
        ProjectRepository.add(project)

        # 演示账号存在时默认加入
        cfg = current_app.config
        for demo_id in (cfg["DEMO_QA_USER_ID"], cfg["DEMO_DEV_USER_ID"]):
            demo_user = UserRepository.find_by_id(demo_id)
            if demo_user and not project.find_member_by_username(demo_user.username):
                ProjectService._append_member(
                    project, demo_user, demo_user.name, demo_user.username, demo_user.role
                )

        members = data.get("members") or []
        if not isinstance(members, list):
            raise BizError("members must be an array", 400)
        for raw in members:
            name_, username, role = ProjectService._member_fields(raw)
            if project.find_member_by_username(username):
                continue
            user = UserRepository.find_by_username(username)
            ProjectService._append_member(project, user, name_, username, role, raw.get("password"))

        ProjectRepository.commit()
        logger.info("project created: %s by %s", project.id, identity.user_id)
        return project

    @staticmethod
    def update(project_id: str, data: dict) -> Project:
        project = ProjectService.get_or_404(project_id)
        if "name" in data:
            name = data.get("name")
            if not isinstance(name, str) or not name.strip():
                raise BizError("Project name is required", 400)
            project.name = name.strip()
        if "description" in data:
            project.description = data.get("description")
        if "permissions" in data:
            project.permissions = ProjectService.validate_permissions(
                data["permissions"], project.permissions
            )
        if "taskBoardSettings" in data:
            project.task_board_settings = ProjectService.validate_board_settings(
                data["taskBoardSettings"], project.task_board_settings
            )
        ProjectRepository.commit()
        return project

    @staticmethod
    def update_permissions(project_id: str, data: dict) -> Project:
        project = ProjectService.get_or_404(project_id)
        payload = data.get("permissions", data) if isinstance(data, dict) else data
        project.permissions = ProjectService.validate_permissions(payload, project.permissions)
        flag_modified(project, "permissions")
        ProjectRepository.commit()
        return project

    @staticmethod
    def update_board_settings(project_id: str, data: dict) -> Project:
        project = ProjectService.get_or_404(project_id)
        payload = data.get("taskBoardSettings", data) if isinstance(data, dict) else data
        project.task_board_settings = ProjectService.validate_board_settings(
            payload, project.task_board_settings
        )
        flag_modified(project, "task_board_settings")
        ProjectRepository.commit()
        return project

    @staticmethod
    def delete(project_id: str, identity: Identity):
        project = ProjectService.get_or_404(project_id)
        if str(project.created_by) != str(identity.user_id):
            raise BizError("Not authorized to delete this project", 403)
        ProjectRepository.delete(project)
        ProjectRepository.commit()
        logger.info("project deleted: %s", project_id)
