# -*- coding: utf-8 -*-
"""
link_service.py
--------------------------------------------------------------------
用例 / 缺陷 / 任务之间的双向关联维护。
约定：
- 调用方负责 commit，关联变更与主记录在同一事务内提交
- 引用了不存在的对端 id 时直接从本方列表中剔除，保证两侧对称
- 任务侧的反向字段是 links 列表，其余类型是 linked_*_ids
"""

import logging

from constants.work_items import ItemKind
from services.sequence_service import repository_for
from utils.exceptions import BizError
from utils.payload import as_id_list

logger = logging.getLogger(__name__)

TASK_LINK_TARGETS = (ItemKind.BUG.value, ItemKind.TEST_CASE.value)


class LinkService:

    @staticmethod
    def dedupe_ids(value, field: str) -> list:
        return as_id_list(value, field)

    @staticmethod
    def normalize_task_links(value) -> list:
        """[{targetType, targetId}] 校验类型并按 (类型, id) 去重"""
        if value is None:
            return []
        if not isinstance(value, list):
            raise BizError("links must be an array", 400)
        result, seen = [], set()
        for entry in value:
            if not isinstance(entry, dict):
                raise BizError("links entries must be objects", 400)
            target_type = entry.get("targetType")
            target_id = entry.get("targetId")
            if target_type not in TASK_LINK_TARGETS:
                raise BizError(f"targetType must be one of {list(TASK_LINK_TARGETS)}", 400)
            if target_id is None or not str(target_id).strip():
                raise BizError("targetId is required", 400)
            key = (target_type, str(target_id))
            if key in seen:
                continue
            seen.add(key)
            result.append({"targetType": target_type, "targetId": str(target_id)})
        return result

    @staticmethod
    def _resolve_peers(item, kind: str, ids) -> list:
        """加载对端；找不到的 id 从本方剔除"""
        ids = set(ids)
        if not ids:
            return []
        peers = repository_for(kind).find_by_ids(ids)
        found = {p.id for p in peers}
        missing = ids - found
        if missing:
            logger.info("%s %s: dropping unknown %s links %s", item.KIND, item.id, kind, sorted(missing))
            current = [i for i in item.linked_ids(kind) if i not in missing]
            item.retain_links(kind, current)
        return peers

    @staticmethod
    def attach(item):
        """新建后：为所有引用到的对端补上反向引用"""
        for kind in item.LINK_FIELDS:
            for peer in LinkService._resolve_peers(item, kind, item.linked_ids(kind)):
                peer.add_link(item.KIND, item.id)

    @staticmethod
    def sync(item, before: dict):
        """
        更新后：before 为更新前的 link_snapshot()，
        新增的对端 add，移除的对端 pull。
        """
        for kind in item.LINK_FIELDS:
            old_ids = before.get(kind, set())
            new_ids = set(item.linked_ids(kind))
            added = new_ids - old_ids
            removed = old_ids - new_ids
            for peer in LinkService._resolve_peers(item, kind, added):
                peer.add_link(item.KIND, item.id)
            if removed:
                for peer in repository_for(kind).find_by_ids(removed):
                    peer.remove_link(item.KIND, item.id)
            if added or removed:
                logger.debug("%s %s %s links +%s -%s", item.KIND, item.id, kind, sorted(added), sorted(removed))

    @staticmethod
    def detach(item):
        """
        删除 / 移动前：从所有对端撤销反向引用并清空本方关联。
        除本方记录的对端外，还扫描对端表，覆盖单向残留的引用。
        """
        for kind in item.LINK_FIELDS:
            repo = repository_for(kind)
            peers = {p.id: p for p in repo.find_by_ids(item.linked_ids(kind))}
            for peer in repo.find_referencing(item.KIND, item.id):
                peers.setdefault(peer.id, peer)
            for peer in peers.values():
                peer.remove_link(item.KIND, item.id)
            item.clear_links(kind)
            if peers:
                logger.debug("%s %s detached from %d %s", item.KIND, item.id, len(peers), kind)
