from models.test_case import TestCase
from repositories.work_item_repository import WorkItemRepository


class TestCaseRepository(WorkItemRepository):
    __test__ = False
    model = TestCase
