# app/schemas/social.py

from typing import Optional
from datetime import datetime
from pydantic import Field
from app.models.entity_type import EntityType
from app.schemas.common import CamelModel, Page


class FollowUser(CamelModel):
    user_id: int
    username: str
    avatar: Optional[str] = None
    bio: Optional[str] = None
    followed_at: Optional[datetime] = None


class FollowStats(CamelModel):
    followers: int
    following: int


class ListCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    is_public: bool = True


class ListUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    is_public: Optional[bool] = None


class ListItemCreate(CamelModel):
    entity_id: int
    entity_type: EntityType


class ListItem(CamelModel):
    item_id: int
    list_id: int
    entity_id: int
    entity_type: EntityType
    created_at: Optional[datetime] = None


class UserList(CamelModel):
    list_id: int
    user_id: int
    name: str
    description: Optional[str] = None
    is_public: bool = True
    item_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserListDetail(UserList):
    items: Page = Field(description="Paginated list items")
