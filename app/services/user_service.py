# app/services/user_service.py

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, and_
from app.models.user import UserModel
from app.models.session import SessionModel
from app.schemas.user import User, UserProfileUpdate, PasswordChange
from app.core.auth import get_password_hash, verify_password
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db

    def get_user_model(self, user_id: int) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        user_model = self.get_user_model(user_id)
        return User.model_validate(user_model) if user_model else None

    def update_profile(self, user_id: int, data: UserProfileUpdate) -> User:
        """Update username, bio or avatar"""
        user_model = self.get_user_model(user_id)
        if not user_model:
            raise NotFoundError("User not found")

        if data.username is not None and data.username != user_model.username:
            taken_stmt = select(UserModel.user_id).where(
                and_(UserModel.username == data.username, UserModel.user_id != user_id)
            )
            if self.db.execute(taken_stmt).first():
                raise ConflictError("Username already taken")
            user_model.username = data.username
        if data.bio is not None:
            user_model.bio = data.bio
        if data.avatar is not None:
            user_model.avatar = str(data.avatar)

        self.db.commit()
        self.db.refresh(user_model)
        logger.info("Profile updated for user %s", user_id)
        return User.model_validate(user_model)

    def change_password(self, user_id: int, data: PasswordChange) -> None:
        user_model = self.get_user_model(user_id)
        if not user_model:
            raise NotFoundError("User not found")
        if not verify_password(data.old_password, user_model.password_hash):
            raise UnauthorizedError("Current password is incorrect")
        if data.old_password == data.new_password:
            raise BadRequestError("New password must differ from the current one")

        user_model.password_hash = get_password_hash(data.new_password)
        # every refresh token is invalidated
        self.db.execute(delete(SessionModel).where(SessionModel.user_id == user_id))
        self.db.commit()
        logger.info("Password changed for user %s", user_id)
