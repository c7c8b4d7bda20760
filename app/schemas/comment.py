# app/schemas/comment.py

from typing import List, Optional
from datetime import datetime
from pydantic import Field
from app.models.entity_type import EntityType
from app.schemas.common import CamelModel, UserSummary


class CommentCreate(CamelModel):
    entity_id: int = Field(description="Commented entity")
    entity_type: EntityType = Field(description="movie, music or short")
    content: str = Field(min_length=1, max_length=5000, description="Comment text")
    rating: Optional[int] = Field(default=None, ge=1, le=5, description="Optional score")


class CommentReply(CamelModel):
    content: str = Field(min_length=1, max_length=5000)


class CommentUpdate(CamelModel):
    content: Optional[str] = Field(default=None, min_length=1, max_length=5000)
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class Comment(CamelModel):
    comment_id: int = Field(description="Comment ID")
    user_id: int
    entity_id: int
    entity_type: EntityType
    parent_id: Optional[int] = None
    content: str
    rating: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    likes_count: int = 0
    is_liked: bool = False
    reply_count: int = 0
    replies: List["Comment"] = Field(default_factory=list, description="Newest replies preview")


class LikeCount(CamelModel):
    comment_id: int
    likes_count: int
