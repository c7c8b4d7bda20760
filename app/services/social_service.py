# app/services/social_service.py

import logging
from typing import Dict, List
from sqlalchemy.orm import Session
from sqlalchemy import select, func, delete
from app.models.entity_type import EntityType
from app.models.follow import FollowModel
from app.models.user import UserModel
from app.models.user_list import ListItemModel, ListModel
from app.schemas.common import Page
from app.schemas.social import (
    FollowStats,
    FollowUser,
    ListCreate,
    ListItem,
    ListItemCreate,
    ListUpdate,
    UserList,
    UserListDetail,
)
from app.services.catalog import ensure_entity
from app.services.notification_service import NotificationService
from app.services.pagination import build_page, count_rows, page_offset, paginate
from app.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class SocialService:
    """User follows and curated lists"""

    def __init__(self, db: Session):
        self.db = db

    def follow_user(self, follower_id: int, following_id: int) -> FollowStats:
        if follower_id == following_id:
            raise BadRequestError("You cannot follow yourself")
        target = self._get_user(following_id)
        if self.is_following(follower_id, following_id):
            raise ConflictError("Already following this user")

        self.db.add(FollowModel(follower_id=follower_id, following_id=following_id))
        self.db.commit()
        logger.info("User %s followed user %s", follower_id, following_id)

        follower = self._get_user(follower_id)
        NotificationService(self.db).create(
            user_id=target.user_id,
            type="follow",
            title="New follower",
            message=f"{follower.username} started following you",
            related_entity_id=follower_id,
        )
        return self.get_follow_stats(following_id)

    def unfollow_user(self, follower_id: int, following_id: int) -> FollowStats:
        stmt = select(FollowModel).where(
            FollowModel.follower_id == follower_id, FollowModel.following_id == following_id
        )
        follow_model = self.db.execute(stmt).scalar_one_or_none()
        if not follow_model:
            raise NotFoundError("Not following this user")
        self.db.delete(follow_model)
        self.db.commit()
        logger.info("User %s unfollowed user %s", follower_id, following_id)
        return self.get_follow_stats(following_id)

    def get_followers(self, user_id: int, page: int = 1, limit: int = 20) -> Page[FollowUser]:
        self._get_user(user_id)
        stmt = (
            select(UserModel, FollowModel.created_at)
            .join(FollowModel, FollowModel.follower_id == UserModel.user_id)
            .where(FollowModel.following_id == user_id)
            .order_by(FollowModel.created_at.desc(), UserModel.user_id.desc())
        )
        return paginate(self.db, stmt, page, limit, self._follow_user, scalars=False)

    def get_following(self, user_id: int, page: int = 1, limit: int = 20) -> Page[FollowUser]:
        self._get_user(user_id)
        stmt = (
            select(UserModel, FollowModel.created_at)
            .join(FollowModel, FollowModel.following_id == UserModel.user_id)
            .where(FollowModel.follower_id == user_id)
            .order_by(FollowModel.created_at.desc(), UserModel.user_id.desc())
        )
        return paginate(self.db, stmt, page, limit, self._follow_user, scalars=False)

    def is_following(self, follower_id: int, following_id: int) -> bool:
        stmt = select(FollowModel.follower_id).where(
            FollowModel.follower_id == follower_id, FollowModel.following_id == following_id
        )
        return self.db.execute(stmt).first() is not None

    def get_follow_stats(self, user_id: int) -> FollowStats:
        followers = self.db.execute(
            select(func.count()).select_from(FollowModel).where(FollowModel.following_id == user_id)
        ).scalar_one()
        following = self.db.execute(
            select(func.count()).select_from(FollowModel).where(FollowModel.follower_id == user_id)
        ).scalar_one()
        return FollowStats(followers=followers, following=following)

    # lists

    def create_list(self, user_id: int, data: ListCreate) -> UserList:
        list_model = ListModel(
            user_id=user_id,
            name=data.name,
            description=data.description,
            is_public=data.is_public,
        )
        self.db.add(list_model)
        self.db.commit()
        self.db.refresh(list_model)
        logger.info("User %s created list %s", user_id, list_model.list_id)
        return UserList.model_validate(list_model)

    def update_list(self, user_id: int, list_id: int, data: ListUpdate) -> UserList:
        list_model = self._get_owned_list(user_id, list_id)
        if data.name is not None:
            list_model.name = data.name
        if data.description is not None:
            list_model.description = data.description
        if data.is_public is not None:
            list_model.is_public = data.is_public
        self.db.commit()
        self.db.refresh(list_model)
        return self._user_lists([list_model])[0]

    def delete_list(self, user_id: int, list_id: int) -> None:
        list_model = self._get_owned_list(user_id, list_id)
        self.db.execute(delete(ListItemModel).where(ListItemModel.list_id == list_id))
        self.db.delete(list_model)
        self.db.commit()
        logger.info("User %s deleted list %s", user_id, list_id)

    def add_list_item(self, user_id: int, list_id: int, data: ListItemCreate) -> ListItem:
        self._get_owned_list(user_id, list_id)
        ensure_entity(self.db, data.entity_id, data.entity_type)
        entity_type = EntityType(data.entity_type).value
        stmt = select(ListItemModel).where(
            ListItemModel.list_id == list_id,
            ListItemModel.entity_id == data.entity_id,
            ListItemModel.entity_type == entity_type,
        )
        if self.db.execute(stmt).scalar_one_or_none():
            raise ConflictError("Item already in list")
        item_model = ListItemModel(list_id=list_id, entity_id=data.entity_id, entity_type=entity_type)
        self.db.add(item_model)
        self.db.commit()
        self.db.refresh(item_model)
        return ListItem.model_validate(item_model)

    def remove_list_item(self, user_id: int, list_id: int, item_id: int) -> None:
        self._get_owned_list(user_id, list_id)
        self.db.execute(
            delete(ListItemModel).where(
                ListItemModel.list_id == list_id, ListItemModel.item_id == item_id
            )
        )
        self.db.commit()

    def get_list(
        self, list_id: int, viewer_id: int = None, page: int = 1, limit: int = 20
    ) -> UserListDetail:
        """List with its items; private lists are shown to their owner only"""
        list_model = self._get_list(list_id)
        if not list_model.is_public and list_model.user_id != viewer_id:
            raise NotFoundError("List not found")
        items_stmt = (
            select(ListItemModel)
            .where(ListItemModel.list_id == list_id)
            .order_by(ListItemModel.created_at.desc(), ListItemModel.item_id.desc())
        )
        items = paginate(self.db, items_stmt, page, limit, ListItem.model_validate)
        summary = self._user_lists([list_model])[0]
        return UserListDetail(**summary.model_dump(), items=items)

    def get_user_lists(
        self, user_id: int, viewer_id: int = None, page: int = 1, limit: int = 20
    ) -> Page[UserList]:
        stmt = select(ListModel).where(ListModel.user_id == user_id)
        if viewer_id != user_id:
            stmt = stmt.where(ListModel.is_public.is_(True))
        stmt = stmt.order_by(ListModel.created_at.desc(), ListModel.list_id.desc())
        total = count_rows(self.db, stmt)
        rows = self.db.execute(stmt.offset(page_offset(page, limit)).limit(limit)).scalars().all()
        return build_page(self._user_lists(rows), total, page, limit)

    def _user_lists(self, list_models: List[ListModel]) -> List[UserList]:
        ids = [l.list_id for l in list_models]
        counts: Dict[int, int] = {}
        if ids:
            stmt = (
                select(ListItemModel.list_id, func.count(ListItemModel.item_id))
                .where(ListItemModel.list_id.in_(ids))
                .group_by(ListItemModel.list_id)
            )
            counts = dict(self.db.execute(stmt).all())
        lists = []
        for list_model in list_models:
            user_list = UserList.model_validate(list_model)
            user_list.item_count = counts.get(list_model.list_id, 0)
            lists.append(user_list)
        return lists

    def _get_list(self, list_id: int) -> ListModel:
        stmt = select(ListModel).where(ListModel.list_id == list_id)
        list_model = self.db.execute(stmt).scalar_one_or_none()
        if not list_model:
            raise NotFoundError("List not found")
        return list_model

    def _get_owned_list(self, user_id: int, list_id: int) -> ListModel:
        list_model = self._get_list(list_id)
        if list_model.user_id != user_id:
            raise ForbiddenError("Not your list")
        return list_model

    def _get_user(self, user_id: int) -> UserModel:
        stmt = select(UserModel).where(UserModel.user_id == user_id)
        user_model = self.db.execute(stmt).scalar_one_or_none()
        if not user_model:
            raise NotFoundError("User not found")
        return user_model

    @staticmethod
    def _follow_user(row) -> FollowUser:
        user_model, followed_at = row
        return FollowUser(
            user_id=user_model.user_id,
            username=user_model.username,
            avatar=user_model.avatar,
            bio=user_model.bio,
            followed_at=followed_at,
        )
