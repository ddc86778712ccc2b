# -*- coding: utf-8 -*-
"""
notification_service.py
--------------------------------------------------------------------
通知生成与查询。
扇出规则：
- 新建缺陷：通知项目内所有 DEV
- 缺陷状态变化：通知项目全部成员
- 顶层评论：通知除作者外的全部成员
- 回复：只通知被回复评论的作者（作者本人回复自己时不通知）
成员的接收人 id 优先 userId，缺失时退回成员记录 id。
通知在主记录提交之后单独提交，失败不回滚主记录。
"""

import logging
from typing import Iterable, List

from constants.roles import MemberRole
from constants.work_items import NotificationType
from models.mixins import new_id
from models.notification import Notification
from repositories.notification_repository import NotificationRepository
from repositories.project_repository import ProjectRepository
from utils.exceptions import BizError

logger = logging.getLogger(__name__)

BUG_CREATED_TEMPLATE = "New bug created: {title}"
BUG_STATUS_TEMPLATE = 'Bug "{title}" status changed to {status}'
COMMENT_TEMPLATE = '{name} commented on "{title}"'
REPLY_TEMPLATE = '{name} replied to your comment on "{title}"'


class NotificationService:

    @staticmethod
    def _dispatch(recipients: Iterable[str], ntype: str, bug, message: str) -> List[Notification]:
        seen, notifications = set(), []
        for user_id in recipients:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            notifications.append(Notification(
                id=new_id(),
                user_id=str(user_id),
                type=ntype,
                bug_id=bug.id,
                bug_title=bug.title,
                message=message,
                read=False,
            ))
        if notifications:
            NotificationRepository.add_all(notifications)
            NotificationRepository.commit()
            logger.info("%s: %d notifications for bug %s", ntype, len(notifications), bug.id)
        return notifications

    @staticmethod
    def notify_bug_created(bug) -> List[Notification]:
        project = ProjectRepository.get_by_id(bug.project_id)
        if not project:
            return []
        recipients = [m.recipient_id for m in project.members if m.role == MemberRole.DEV.value]
        return NotificationService._dispatch(
            recipients,
            NotificationType.BUG_CREATED.value,
            bug,
            BUG_CREATED_TEMPLATE.format(title=bug.title),
        )

    @staticmethod
    def notify_bug_status_changed(bug) -> List[Notification]:
        project = ProjectRepository.get_by_id(bug.project_id)
        if not project:
            return []
        return NotificationService._dispatch(
            project.member_recipient_ids(),
            NotificationType.BUG_STATUS_CHANGED.value,
            bug,
            BUG_STATUS_TEMPLATE.format(title=bug.title, status=bug.status),
        )

    @staticmethod
    def notify_comment(bug, author_id: str, author_name: str) -> List[Notification]:
        project = ProjectRepository.get_by_id(bug.project_id)
        if not project:
            return []
        recipients = [rid for rid in project.member_recipient_ids() if rid != str(author_id)]
        return NotificationService._dispatch(
            recipients,
            NotificationType.COMMENT_ADDED.value,
            bug,
            COMMENT_TEMPLATE.format(name=author_name, title=bug.title),
        )

    @staticmethod
    def notify_reply(bug, parent_comment, author_id: str, author_name: str) -> List[Notification]:
        if parent_comment is None or str(parent_comment.user_id) == str(author_id):
            return []
        return NotificationService._dispatch(
            [parent_comment.user_id],
            NotificationType.COMMENT_ADDED.value,
            bug,
            REPLY_TEMPLATE.format(name=author_name, title=bug.title),
        )

    # ---------- 接收人操作 ----------
    @staticmethod
    def list_for_user(user_id: str) -> List[Notification]:
        return NotificationRepository.list_for_user(user_id)

    @staticmethod
    def mark_read(notification_id: str, user_id: str) -> Notification:
        notification = NotificationRepository.get_for_user(notification_id, user_id)
        if not notification:
            raise BizError("Notification not found", 404)
        notification.read = True
        NotificationRepository.commit()
        return notification

    @staticmethod
    def clear(user_id: str) -> int:
        count = NotificationRepository.delete_for_user(user_id)
        NotificationRepository.commit()
        logger.info("cleared %d notifications for %s", count, user_id)
        return count
