# app/schemas/search.py

from typing import Optional
from pydantic import Field
from app.models.entity_type import EntityType
from app.schemas.common import CamelModel


class SearchResult(CamelModel):
    """One hit from the mixed catalog search"""

    type: EntityType = Field(description="movie, music or short")
    id: int
    title: str
    subtitle: Optional[str] = Field(default=None, description="Director, artist or description")
    image_url: Optional[str] = None
