# app/schemas/common.py

from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON keys"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(CamelModel, Generic[T]):
    """Paginated result envelope"""

    items: List[T] = Field(description="Rows on this page")
    total: int = Field(description="Total matching rows")
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Page size")
    has_more: bool = Field(description="Whether rows remain after this page")


class UserSummary(CamelModel):
    user_id: int = Field(description="User ID")
    username: str = Field(description="Username")
    avatar: Optional[str] = Field(default=None, description="Avatar URL")
