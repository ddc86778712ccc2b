# -*- coding: utf-8 -*-
"""
sequence_service.py
--------------------------------------------------------------------
友好编号 / 执行编号分配：
- 读取集合中最新一条带前缀的记录，推算下一个编号（非原子，尽力而为）
- 批量路径只读取一次，之后本地递增
- 并发导致的重复编号由 repair_duplicates 修复（flask repair-friendly-ids）
"""

import logging
from collections import OrderedDict

from constants.work_items import (
    FRIENDLY_ID_PREFIXES,
    ItemKind,
    RUN_ID_PREFIX,
    RUN_ID_WIDTH,
)
from repositories.bug_repository import BugRepository
from repositories.task_repository import TaskRepository
from repositories.test_case_repository import TestCaseRepository
from repositories.test_run_repository import TestRunRepository
from utils.friendly_id import (
    FriendlyIdCounter,
    max_friendly_number,
    next_friendly_id,
    pick_latest,
)

logger = logging.getLogger(__name__)

REPOSITORIES = {
    ItemKind.TEST_CASE.value: TestCaseRepository,
    ItemKind.BUG.value: BugRepository,
    ItemKind.TASK.value: TaskRepository,
}


def repository_for(kind: str):
    try:
        return REPOSITORIES[kind]
    except KeyError:
        raise ValueError(f"unknown item kind: {kind}")


class SequenceService:

    @staticmethod
    def latest_friendly_id(kind: str):
        prefix = FRIENDLY_ID_PREFIXES[kind]
        return pick_latest(repository_for(kind).latest_friendly_ids(prefix), prefix)

    @staticmethod
    def next_friendly_id(kind: str) -> str:
        prefix = FRIENDLY_ID_PREFIXES[kind]
        return next_friendly_id(prefix, SequenceService.latest_friendly_id(kind))

    @staticmethod
    def counter(kind: str) -> FriendlyIdCounter:
        prefix = FRIENDLY_ID_PREFIXES[kind]
        return FriendlyIdCounter(prefix, SequenceService.latest_friendly_id(kind))

    @staticmethod
    def next_run_id(project_id: str) -> str:
        latest = pick_latest(TestRunRepository.latest_run_ids(project_id), RUN_ID_PREFIX)
        return next_friendly_id(RUN_ID_PREFIX, latest, RUN_ID_WIDTH)

    @staticmethod
    def repair_duplicates(kind: str) -> list:
        """
        按编号分组，每组保留最早创建的一条，其余依次分配到当前最大值之后。
        返回 [(id, 旧编号, 新编号), ...]。
        """
        repo = repository_for(kind)
        prefix = FRIENDLY_ID_PREFIXES[kind]
        items = repo.all_with_friendly_id(prefix)

        groups = OrderedDict()
        for item in items:
            groups.setdefault(item.friendly_id, []).append(item)

        counter = FriendlyIdCounter(prefix)
        counter.current = max_friendly_number(groups.keys(), prefix)

        changes = []
        for friendly_id, group in groups.items():
            if len(group) < 2:
                continue
            for dup in group[1:]:
                new_fid = counter.next()
                changes.append((dup.id, friendly_id, new_fid))
                dup.friendly_id = new_fid
                logger.info("%s %s: %s -> %s", kind, dup.id, friendly_id, new_fid)
        if changes:
            repo.commit()
        return changes

    @staticmethod
    def backfill(kind: str) -> list:
        """为缺少编号的记录按创建时间补齐编号，接在当前最新编号之后"""
        repo = repository_for(kind)
        items = repo.without_friendly_id()
        if not items:
            return []
        counter = SequenceService.counter(kind)
        changes = []
        for item in items:
            item.friendly_id = counter.next()
            changes.append((item.id, item.friendly_id))
        repo.commit()
        logger.info("backfilled %d %s friendly ids", len(changes), kind)
        return changes
