# app/services/notification_service.py

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, update, delete
from app.models.notification import NotificationModel
from app.models.follow import FollowModel
from app.schemas.common import Page
from app.schemas.notification import Notification
from app.services.pagination import paginate
from app.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class NotificationService:

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        user_id: int,
        type: str,
        title: str,
        message: str,
        related_entity_id: Optional[int] = None,
    ) -> Notification:
        notification_model = NotificationModel(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            related_entity_id=related_entity_id,
        )
        self.db.add(notification_model)
        self.db.commit()
        self.db.refresh(notification_model)
        return Notification.model_validate(notification_model)

    def get_notifications(
        self, user_id: int, unread_only: bool = False, page: int = 1, limit: int = 20
    ) -> Page[Notification]:
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))
        stmt = stmt.order_by(
            NotificationModel.created_at.desc(), NotificationModel.notification_id.desc()
        )
        return paginate(self.db, stmt, page, limit, Notification.model_validate)

    def get_unread_count(self, user_id: int) -> int:
        stmt = select(func.count(NotificationModel.notification_id)).where(
            NotificationModel.user_id == user_id,
            NotificationModel.is_read.is_(False),
        )
        return self.db.execute(stmt).scalar_one()

    def mark_as_read(self, user_id: int, notification_id: int) -> Notification:
        notification_model = self._get_owned(user_id, notification_id)
        notification_model.is_read = True
        self.db.commit()
        self.db.refresh(notification_model)
        return Notification.model_validate(notification_model)

    def mark_all_as_read(self, user_id: int) -> int:
        result = self.db.execute(
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
            .values(is_read=True)
        )
        self.db.commit()
        return result.rowcount

    def delete(self, user_id: int, notification_id: int) -> None:
        notification_model = self._get_owned(user_id, notification_id)
        self.db.delete(notification_model)
        self.db.commit()

    def notify_followers(
        self,
        user_id: int,
        type: str,
        title: str,
        message: str,
        related_entity_id: Optional[int] = None,
    ) -> int:
        """Send one notification to each follower of a user"""
        stmt = select(FollowModel.follower_id).where(FollowModel.following_id == user_id)
        follower_ids = self.db.execute(stmt).scalars().all()
        if not follower_ids:
            return 0
        self.db.add_all(
            [
                NotificationModel(
                    user_id=follower_id,
                    type=type,
                    title=title,
                    message=message,
                    related_entity_id=related_entity_id,
                )
                for follower_id in follower_ids
            ]
        )
        self.db.commit()
        logger.info("Notified %d followers of user %s", len(follower_ids), user_id)
        return len(follower_ids)

    def _get_owned(self, user_id: int, notification_id: int) -> NotificationModel:
        stmt = select(NotificationModel).where(
            NotificationModel.notification_id == notification_id,
            NotificationModel.user_id == user_id,
        )
        notification_model = self.db.execute(stmt).scalar_one_or_none()
        if not notification_model:
            raise NotFoundError("Notification not found")
        return notification_model
