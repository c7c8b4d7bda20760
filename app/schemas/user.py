# app/schemas/user.py

import re
from typing import Optional
from datetime import datetime
from pydantic import EmailStr, Field, HttpUrl, field_validator
from app.schemas.common import CamelModel


def _normalize_email(value: str) -> str:
    return value.lower()


def _check_password_strength(value: str) -> str:
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain uppercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain number")
    return value


class User(CamelModel):
    user_id: int = Field(description="User ID")
    email: str = Field(description="Email")
    username: str = Field(description="Username")
    bio: Optional[str] = Field(default=None, description="Profile bio")
    avatar: Optional[str] = Field(default=None, description="Avatar URL")
    is_admin: bool = Field(default=False, description="Administrator flag")
    created_at: Optional[datetime] = Field(default=None, description="Sign-up time")
    last_login: Optional[datetime] = Field(default=None, description="Last login time")


class UserSignup(CamelModel):
    email: EmailStr = Field(description="Email")
    username: str = Field(description="Username", min_length=3, max_length=30)
    password: str = Field(description="Password", min_length=8)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password_strength(value)


class UserLogin(CamelModel):
    email: EmailStr = Field(description="Email")
    password: str = Field(description="Password", min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class RefreshRequest(CamelModel):
    refresh_token: Optional[str] = Field(
        default=None, description="Refresh token, falls back to the refresh_token cookie"
    )


class TokenPair(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token lifetime in seconds")


class AuthResponse(CamelModel):
    user: User
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class UserProfileUpdate(CamelModel):
    """Profile update request"""

    username: Optional[str] = Field(default=None, min_length=3, max_length=30)
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar: Optional[HttpUrl] = Field(default=None, description="Avatar URL")


class PasswordChange(CamelModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return _check_password_strength(value)
