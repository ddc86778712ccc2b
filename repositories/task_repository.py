from typing import List, Optional

from sqlalchemy import select, func

from extensions.database import db
from models.task import Task
from repositories.work_item_repository import WorkItemRepository


class TaskRepository(WorkItemRepository):
    model = Task

    @classmethod
    def list(cls, project_id: Optional[str] = None) -> List[Task]:
        """看板顺序：order 升序，同序号按创建时间倒序"""
        stmt = select(Task)
        if project_id:
            stmt = stmt.where(Task.project_id == str(project_id))
        stmt = stmt.order_by(Task.order.asc(), Task.created_at.desc())
        return list(db.session.execute(stmt).scalars())

    @staticmethod
    def children_of(task_id: str) -> List[Task]:
        stmt = select(Task).where(Task.parent_id == str(task_id))
        return list(db.session.execute(stmt).scalars())

    @staticmethod
    def max_order(project_id: str) -> Optional[int]:
        stmt = select(func.max(Task.order)).where(Task.project_id == str(project_id))
        return db.session.execute(stmt).scalar()
