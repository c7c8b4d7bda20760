# app/schemas/engagement.py

from typing import Dict, Optional
from datetime import datetime
from pydantic import Field
from app.models.entity_type import EntityType
from app.schemas.common import CamelModel
from app.schemas.movie import MovieSummary


class EntityRef(CamelModel):
    entity_id: int = Field(description="Target entity ID")
    entity_type: EntityType = Field(description="movie, music or short")


class RatingCreate(EntityRef):
    # range enforced by the engagement service
    rating: int = Field(description="Score from 1 to 5")
    comment: Optional[str] = Field(default=None, max_length=1000)


class Rating(CamelModel):
    rating_id: int
    user_id: int
    entity_id: int
    entity_type: EntityType
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RatingSummary(CamelModel):
    count: int = Field(description="Number of ratings")
    average: float = Field(description="Mean score, one decimal")
    distribution: Dict[int, int] = Field(description="Ratings per score 1-5")


class FavoriteCreate(EntityRef):
    pass


class Favorite(CamelModel):
    favorite_id: int
    user_id: int
    entity_id: int
    entity_type: EntityType
    added_at: Optional[datetime] = None


class WatchlistCreate(CamelModel):
    movie_id: int = Field(description="Movie to save")


class WatchlistEntry(CamelModel):
    watchlist_id: int
    movie_id: int
    added_at: Optional[datetime] = None
    movie: Optional[MovieSummary] = None


class HistoryCreate(EntityRef):
    progress: int = Field(default=0, ge=0, description="Seconds watched")
    duration: int = Field(ge=0, description="Total length in seconds")


class HistoryEntry(CamelModel):
    history_id: int
    user_id: int
    entity_id: int
    entity_type: EntityType
    progress: int = 0
    duration: Optional[int] = None
    watched_at: Optional[datetime] = None


class WatchProgress(CamelModel):
    progress: int
    duration: Optional[int] = None
    percentage: float = Field(description="progress / duration * 100, 0 without a duration")
    last_watched: Optional[datetime] = None


class EngagementStats(CamelModel):
    favorites: int
    ratings: int
    watchlist: int
    history_entries: int
    total_minutes_watched: int
