from models.bug import Bug
from repositories.work_item_repository import WorkItemRepository


class BugRepository(WorkItemRepository):
    model = Bug
