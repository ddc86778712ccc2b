from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import IntegrityError
from extensions.database import db
from models.project import Project


class ProjectRepository:
    @staticmethod
    def add(project: Project) -> Project:
        db.session.add(project)
        return project

    @staticmethod
    def get_by_id(project_id: str) -> Optional[Project]:
        if not project_id:
            return None
        stmt = (
            select(Project)
            .options(selectinload(Project.members))
            .where(Project.id == str(project_id))
        )
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def exists(project_id: str) -> bool:
        if not project_id:
            return False
        stmt = select(Project.id).where(Project.id == str(project_id))
        return db.session.execute(stmt).first() is not None

    @staticmethod
    def list_all() -> List[Project]:
        stmt = (
            select(Project)
            .options(selectinload(Project.members))
            .order_by(Project.created_at.desc())
        )
        return list(db.session.execute(stmt).scalars())

    @staticmethod
    def delete(project: Project):
        db.session.delete(project)

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
