# app/schemas/movie.py

from typing import List, Optional
from datetime import datetime
from pydantic import Field
from app.models.movie import MovieType
from app.schemas.common import CamelModel, UserSummary


class MovieFilters(CamelModel):
    genre: Optional[str] = Field(default=None, description="Genre name")
    year: Optional[int] = Field(default=None, description="Release year")
    type: Optional[MovieType] = Field(default=None, description="movie or tv")
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class MovieSummary(CamelModel):
    movie_id: int = Field(description="Movie ID")
    title: str = Field(description="Title")
    description: Optional[str] = Field(default=None, description="Synopsis")
    poster_url: Optional[str] = Field(default=None, description="Poster URL")
    genres: List[str] = Field(default_factory=list, description="Genre names")
    year: Optional[int] = Field(default=None, description="Release year")
    director: Optional[str] = Field(default=None, description="Director")
    rating: Optional[float] = Field(default=None, description="Average rating")
    duration: Optional[int] = Field(default=None, description="Runtime in minutes")
    type: MovieType = Field(description="movie or tv")
    view_count: int = Field(default=0, description="Detail page views")


class RecentRating(CamelModel):
    rating_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None


class MovieDetail(MovieSummary):
    created_at: Optional[datetime] = Field(default=None, description="Created at")
    recent_ratings: List[RecentRating] = Field(
        default_factory=list, description="Five most recent ratings"
    )


class Short(CamelModel):
    short_id: int = Field(description="Short ID")
    title: str = Field(description="Title")
    description: Optional[str] = None
    video_url: str = Field(description="Video URL")
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, description="Length in seconds")
    creator_id: Optional[int] = None
    likes: int = 0
    views: int = 0
    created_at: Optional[datetime] = None
