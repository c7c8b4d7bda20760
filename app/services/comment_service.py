# app/services/comment_service.py

import logging
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, delete
from app.models.entity_type import EntityType
from app.models.comment import CommentModel
from app.models.comment_like import CommentLikeModel
from app.models.user import UserModel
from app.schemas.common import Page, UserSummary
from app.schemas.comment import Comment, CommentCreate, CommentUpdate
from app.services.catalog import ensure_entity
from app.services.notification_service import NotificationService
from app.services.pagination import build_page, count_rows, page_offset
from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

REPLY_PREVIEW_SIZE = 3


class CommentService:

    def __init__(self, db: Session):
        self.db = db

    def get_comment(self, comment_id: int, current_user_id: Optional[int] = None) -> Comment:
        comment_model = self._get_comment_model(comment_id)
        return self._build_comments([comment_model], current_user_id)[0]

    def create_comment(self, user_id: int, data: CommentCreate) -> Comment:
        ensure_entity(self.db, data.entity_id, data.entity_type)
        comment_model = CommentModel(
            user_id=user_id,
            entity_id=data.entity_id,
            entity_type=EntityType(data.entity_type).value,
            content=data.content,
            rating=data.rating,
        )
        self.db.add(comment_model)
        self.db.commit()
        self.db.refresh(comment_model)
        logger.info("User %s commented on %s %s", user_id, data.entity_type.value, data.entity_id)
        return self.get_comment(comment_model.comment_id, user_id)

    def reply(self, user_id: int, parent_id: int, content: str) -> Comment:
        """Reply to a comment; the reply targets the parent's entity"""
        parent = self._get_comment_model(parent_id)
        reply_model = CommentModel(
            user_id=user_id,
            entity_id=parent.entity_id,
            entity_type=parent.entity_type,
            parent_id=parent.comment_id,
            content=content,
        )
        self.db.add(reply_model)
        self.db.commit()
        self.db.refresh(reply_model)

        if parent.user_id != user_id:
            author = self.db.execute(
                select(UserModel.username).where(UserModel.user_id == user_id)
            ).scalar_one_or_none()
            NotificationService(self.db).create(
                user_id=parent.user_id,
                type="comment_reply",
                title="New reply",
                message=f"{author or 'Someone'} replied to your comment",
                related_entity_id=reply_model.comment_id,
            )
        return self.get_comment(reply_model.comment_id, user_id)

    def get_entity_comments(
        self,
        entity_id: int,
        entity_type: EntityType,
        current_user_id: Optional[int] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[Comment]:
        """Top-level comments of an entity, newest first"""
        stmt = (
            select(CommentModel)
            .where(
                CommentModel.entity_id == entity_id,
                CommentModel.entity_type == EntityType(entity_type).value,
                CommentModel.parent_id.is_(None),
            )
            .order_by(CommentModel.created_at.desc(), CommentModel.comment_id.desc())
        )
        return self._page(stmt, current_user_id, page, limit, with_replies=True)

    def get_replies(
        self,
        parent_id: int,
        current_user_id: Optional[int] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[Comment]:
        self._get_comment_model(parent_id)
        stmt = (
            select(CommentModel)
            .where(CommentModel.parent_id == parent_id)
            .order_by(CommentModel.created_at.asc(), CommentModel.comment_id.asc())
        )
        return self._page(stmt, current_user_id, page, limit)

    def get_user_comments(self, user_id: int, page: int = 1, limit: int = 20) -> Page[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.user_id == user_id, CommentModel.parent_id.is_(None))
            .order_by(CommentModel.created_at.desc(), CommentModel.comment_id.desc())
        )
        return self._page(stmt, user_id, page, limit)

    def update_comment(self, user_id: int, comment_id: int, data: CommentUpdate) -> Comment:
        comment_model = self._get_comment_model(comment_id)
        if comment_model.user_id != user_id:
            raise ForbiddenError("You can only edit your own comments")
        if data.content is not None:
            comment_model.content = data.content
        if data.rating is not None:
            comment_model.rating = data.rating
        self.db.commit()
        return self.get_comment(comment_id, user_id)

    def delete_comment(self, user_id: int, comment_id: int) -> None:
        comment_model = self._get_comment_model(comment_id)
        if comment_model.user_id != user_id:
            raise ForbiddenError("You can only delete your own comments")
        self.remove_thread(comment_id)
        logger.info("User %s deleted comment %s", user_id, comment_id)

    def remove_thread(self, comment_id: int) -> int:
        """Delete a comment with every nested reply and their likes"""
        thread_ids = [comment_id]
        frontier = [comment_id]
        while frontier:
            stmt = select(CommentModel.comment_id).where(CommentModel.parent_id.in_(frontier))
            frontier = list(self.db.execute(stmt).scalars().all())
            thread_ids.extend(frontier)

        self.db.execute(delete(CommentLikeModel).where(CommentLikeModel.comment_id.in_(thread_ids)))
        # children first so the parent foreign key never dangles
        for thread_id in reversed(thread_ids):
            self.db.execute(delete(CommentModel).where(CommentModel.comment_id == thread_id))
        self.db.commit()
        return len(thread_ids)

    def like_comment(self, user_id: int, comment_id: int) -> int:
        self._get_comment_model(comment_id)
        stmt = select(CommentLikeModel).where(
            CommentLikeModel.user_id == user_id, CommentLikeModel.comment_id == comment_id
        )
        if self.db.execute(stmt).scalar_one_or_none():
            raise ConflictError("Comment already liked")
        self.db.add(CommentLikeModel(user_id=user_id, comment_id=comment_id))
        self.db.commit()
        return self.get_likes_count(comment_id)

    def unlike_comment(self, user_id: int, comment_id: int) -> int:
        stmt = select(CommentLikeModel).where(
            CommentLikeModel.user_id == user_id, CommentLikeModel.comment_id == comment_id
        )
        like_model = self.db.execute(stmt).scalar_one_or_none()
        if not like_model:
            raise NotFoundError("Like not found")
        self.db.delete(like_model)
        self.db.commit()
        return self.get_likes_count(comment_id)

    def get_likes_count(self, comment_id: int) -> int:
        stmt = select(func.count(CommentLikeModel.user_id)).where(
            CommentLikeModel.comment_id == comment_id
        )
        return self.db.execute(stmt).scalar_one()

    def _get_comment_model(self, comment_id: int) -> CommentModel:
        stmt = select(CommentModel).where(CommentModel.comment_id == comment_id)
        comment_model = self.db.execute(stmt).scalar_one_or_none()
        if not comment_model:
            raise NotFoundError("Comment not found")
        return comment_model

    def _page(
        self,
        stmt,
        current_user_id: Optional[int],
        page: int,
        limit: int,
        with_replies: bool = False,
    ) -> Page[Comment]:
        total = count_rows(self.db, stmt)
        rows = self.db.execute(stmt.offset(page_offset(page, limit)).limit(limit)).scalars().all()
        items = self._build_comments(rows, current_user_id, with_replies)
        return build_page(items, total, page, limit)

    def _build_comments(
        self,
        comment_models: List[CommentModel],
        current_user_id: Optional[int],
        with_replies: bool = False,
    ) -> List[Comment]:
        if not comment_models:
            return []
        ids = [c.comment_id for c in comment_models]

        likes_stmt = (
            select(CommentLikeModel.comment_id, func.count(CommentLikeModel.user_id))
            .where(CommentLikeModel.comment_id.in_(ids))
            .group_by(CommentLikeModel.comment_id)
        )
        likes: Dict[int, int] = dict(self.db.execute(likes_stmt).all())

        liked = set()
        if current_user_id is not None:
            liked_stmt = select(CommentLikeModel.comment_id).where(
                CommentLikeModel.comment_id.in_(ids), CommentLikeModel.user_id == current_user_id
            )
            liked = set(self.db.execute(liked_stmt).scalars().all())

        reply_counts_stmt = (
            select(CommentModel.parent_id, func.count(CommentModel.comment_id))
            .where(CommentModel.parent_id.in_(ids))
            .group_by(CommentModel.parent_id)
        )
        reply_counts: Dict[int, int] = dict(self.db.execute(reply_counts_stmt).all())

        authors = self._authors({c.user_id for c in comment_models})

        comments = []
        for comment_model in comment_models:
            comment = Comment.model_validate(comment_model)
            comment.user = authors.get(comment_model.user_id)
            comment.likes_count = likes.get(comment_model.comment_id, 0)
            comment.is_liked = comment_model.comment_id in liked
            comment.reply_count = reply_counts.get(comment_model.comment_id, 0)
            if with_replies and comment.reply_count:
                comment.replies = self._reply_preview(comment_model.comment_id, current_user_id)
            comments.append(comment)
        return comments

    def _reply_preview(self, parent_id: int, current_user_id: Optional[int]) -> List[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.parent_id == parent_id)
            .order_by(CommentModel.created_at.desc(), CommentModel.comment_id.desc())
            .limit(REPLY_PREVIEW_SIZE)
        )
        return self._build_comments(self.db.execute(stmt).scalars().all(), current_user_id)

    def _authors(self, user_ids) -> Dict[int, UserSummary]:
        if not user_ids:
            return {}
        stmt = select(UserModel).where(UserModel.user_id.in_(user_ids))
        return {
            user.user_id: UserSummary.model_validate(user)
            for user in self.db.execute(stmt).scalars().all()
        }
