# app/core/dependencies.py

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import User
from app.services.user_service import UserService
from app.core.auth import verify_token
from app.core.config import get_settings
from app.core.exceptions import ForbiddenError, UnauthorizedError

security = HTTPBearer(auto_error=False)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Resolve the bearer token to the logged-in user"""
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    payload = verify_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid or expired token")

    user = user_service.get_user_by_id(payload["user_id"])
    if not user:
        raise UnauthorizedError("User not found")

    return user


def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_service: UserService = Depends(get_user_service),
) -> Optional[User]:
    """Same as get_current_user but anonymous requests get None"""
    if not credentials:
        return None

    payload = verify_token(credentials.credentials)
    if not payload:
        return None

    return user_service.get_user_by_id(payload["user_id"])


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise ForbiddenError("Admin access required")
    return current_user


def require_uploads_enabled() -> None:
    if not get_settings().feature_uploads:
        raise ForbiddenError("Uploads are disabled")
