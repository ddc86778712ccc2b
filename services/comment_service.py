import logging
from typing import List

from models.comment import Comment
from repositories.bug_repository import BugRepository
from repositories.comment_repository import CommentRepository
from repositories.user_repository import UserRepository
from services.notification_service import NotificationService
from utils.exceptions import BizError
from utils.payload import require_id
from utils.permissions import Identity

logger = logging.getLogger(__name__)


class CommentService:

    @staticmethod
    def list_for_bug(bug_id: str) -> List[Comment]:
        return CommentRepository.list_for_bug(bug_id)

    @staticmethod
    def create(data: dict, identity: Identity) -> Comment:
        """
        创建评论并扇出通知：
          - 作者必须是已存在的用户，其 name 写入快照
          - 有 parentId：只通知被回复者
          - 无 parentId：通知项目内除作者外的全部成员
        """
        bug_id = require_id(data.get("bugId"), "bugId")
        content = data.get("content")
        if not isinstance(content, str) or not content.strip():
            raise BizError("content is required", 400)

        author = UserRepository.find_by_id(identity.user_id)
        if not author:
            raise BizError("User not found", 404)

        parent = None
        parent_id = data.get("parentId") or None
        if parent_id:
            parent = CommentRepository.get_by_id(parent_id)
            if not parent or parent.bug_id != bug_id:
                raise BizError("Parent comment not found", 404)

        comment = Comment(
            bug_id=bug_id,
            user_id=author.id,
            user_name=author.name,
            content=content,
            parent_id=parent.id if parent else None,
        )
        CommentRepository.add(comment)
        CommentRepository.commit()

        bug = BugRepository.get_by_id(bug_id)
        if bug is None:
            logger.info("comment %s on unknown bug %s, no notifications", comment.id, bug_id)
        elif parent is not None:
            NotificationService.notify_reply(bug, parent, author.id, author.name)
        else:
            NotificationService.notify_comment(bug, author.id, author.name)
        return comment

    @staticmethod
    def resolve(comment_id: str) -> Comment:
        comment = CommentRepository.get_by_id(comment_id)
        if not comment:
            raise BizError("Comment not found", 404)
        comment.resolved = True
        CommentRepository.commit()
        return comment
