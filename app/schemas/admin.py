# app/schemas/admin.py

from typing import Optional
from datetime import datetime
from pydantic import Field
from app.schemas.common import CamelModel


class AdminUser(CamelModel):
    user_id: int
    email: str
    username: str
    is_admin: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    banned_until: Optional[datetime] = None


class UserStats(CamelModel):
    comments: int
    ratings: int
    favorites: int
    watchlist: int
    history: int
    uploads: int


class PlatformStats(CamelModel):
    users: int
    movies: int
    music: int
    shorts: int
    comments: int
    ratings: int
    total_content: int


class BanRequest(CamelModel):
    reason: Optional[str] = Field(default=None, max_length=1000)


class Ban(CamelModel):
    ban_id: int
    user_id: int
    reason: Optional[str] = None
    banned_until: datetime
    created_at: Optional[datetime] = None


class ModerationReason(CamelModel):
    reason: Optional[str] = Field(default=None, max_length=1000)


class ModerationLog(CamelModel):
    log_id: int
    action: str
    target_id: int
    target_type: str
    reason: Optional[str] = None
    created_at: Optional[datetime] = None


class ReportCreate(CamelModel):
    content_id: int
    content_type: str = Field(min_length=1, max_length=20, description="comment, movie, music, short or user")
    reason: str = Field(min_length=1, max_length=1000)


class ReportResolve(CamelModel):
    resolution: str = Field(min_length=1, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=1000)


class Report(CamelModel):
    report_id: int
    user_id: int
    content_id: int
    content_type: str
    reason: str
    status: str
    resolution: Optional[str] = None
    resolution_notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
