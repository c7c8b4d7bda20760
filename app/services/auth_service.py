# app/services/auth_service.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, or_
from app.models.user import UserModel
from app.models.session import SessionModel
from app.models.moderation import BanModel
from app.schemas.user import AuthResponse, TokenPair, User, UserLogin, UserSignup
from app.core.auth import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
    verify_refresh_token,
)
from app.core.config import get_settings
from app.core.exceptions import ConflictError, ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuthService:
    """Signup, login and refresh-token sessions"""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def signup(self, data: UserSignup) -> AuthResponse:
        stmt = select(UserModel).where(
            or_(UserModel.email == data.email, UserModel.username == data.username)
        )
        existing = self.db.execute(stmt).scalars().first()
        if existing:
            if existing.email == data.email:
                raise ConflictError("Email already registered")
            raise ConflictError("Username already taken")

        user_model = UserModel(
            email=data.email,
            username=data.username,
            password_hash=get_password_hash(data.password),
            last_login=_utcnow(),
        )
        self.db.add(user_model)
        self.db.commit()
        self.db.refresh(user_model)
        logger.info("User %s signed up", user_model.user_id)

        return self._auth_response(user_model)

    def login(self, data: UserLogin) -> AuthResponse:
        stmt = select(UserModel).where(UserModel.email == data.email)
        user_model = self.db.execute(stmt).scalar_one_or_none()
        if not user_model or not verify_password(data.password, user_model.password_hash):
            raise UnauthorizedError("Invalid email or password")
        if not user_model.is_active:
            raise ForbiddenError("Account is disabled")

        ban = self.get_active_ban(user_model.user_id)
        if ban:
            raise ForbiddenError(f"Account is banned until {ban.banned_until.isoformat()}")

        user_model.last_login = _utcnow()
        self.db.commit()
        self.db.refresh(user_model)
        logger.info("User %s logged in", user_model.user_id)

        return self._auth_response(user_model)

    def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        """Rotate a stored refresh token into a new token pair"""
        if not refresh_token:
            raise UnauthorizedError("Refresh token required")
        payload = verify_refresh_token(refresh_token)
        if not payload:
            raise UnauthorizedError("Invalid refresh token")

        stmt = select(SessionModel).where(SessionModel.refresh_token == refresh_token)
        session_model = self.db.execute(stmt).scalar_one_or_none()
        if not session_model or session_model.expires_at < _utcnow():
            raise UnauthorizedError("Session expired")

        user_stmt = select(UserModel).where(UserModel.user_id == session_model.user_id)
        user_model = self.db.execute(user_stmt).scalar_one_or_none()
        if not user_model:
            raise UnauthorizedError("User not found")

        self.db.delete(session_model)
        tokens = self._issue_tokens(user_model)
        self.db.commit()
        return tokens

    def logout(self, user_id: int) -> None:
        # access tokens stay valid until they expire
        self.db.execute(delete(SessionModel).where(SessionModel.user_id == user_id))
        self.db.commit()
        logger.info("User %s logged out", user_id)

    def get_active_ban(self, user_id: int) -> Optional[BanModel]:
        stmt = (
            select(BanModel)
            .where(BanModel.user_id == user_id, BanModel.banned_until > _utcnow())
            .order_by(BanModel.banned_until.desc())
        )
        return self.db.execute(stmt).scalars().first()

    def _issue_tokens(self, user_model: UserModel) -> TokenPair:
        access_token = create_access_token(user_model.user_id, user_model.email)
        refresh_token = create_refresh_token(user_model.user_id, user_model.email)
        self.db.add(
            SessionModel(
                user_id=user_model.user_id,
                refresh_token=refresh_token,
                expires_at=_utcnow() + timedelta(days=self.settings.refresh_token_expire_days),
            )
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.settings.access_token_expire_minutes * 60,
        )

    def _auth_response(self, user_model: UserModel) -> AuthResponse:
        tokens = self._issue_tokens(user_model)
        self.db.commit()
        return AuthResponse(
            user=User.model_validate(user_model),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_in=tokens.expires_in,
        )
