# app/core/auth.py

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from app.core.config import get_settings

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its hash"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def _encode(payload: dict, secret: str, token_type: str, expires_delta: timedelta) -> str:
    to_encode = payload.copy()
    to_encode.update(
        {
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "exp": datetime.now(timezone.utc) + expires_delta,
        }
    )
    return jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a JWT access token"""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    return _encode(
        {"user_id": user_id, "email": email}, settings.jwt_secret, ACCESS_TOKEN, expires_delta
    )


def create_refresh_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a JWT refresh token"""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.refresh_token_expire_days)
    return _encode(
        {"user_id": user_id, "email": email},
        settings.jwt_refresh_secret,
        REFRESH_TOKEN,
        expires_delta,
    )


def _decode(token: str, secret: str, token_type: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("type") != token_type or payload.get("user_id") is None:
        return None
    return payload


def verify_token(token: str) -> Optional[dict]:
    """Decode an access token, None when invalid or expired"""
    return _decode(token, settings.jwt_secret, ACCESS_TOKEN)


def verify_refresh_token(token: str) -> Optional[dict]:
    """Decode a refresh token, None when invalid or expired"""
    return _decode(token, settings.jwt_refresh_secret, REFRESH_TOKEN)
