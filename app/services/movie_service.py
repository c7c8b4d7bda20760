# app/services/movie_service.py

import logging
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_, update
from app.models.movie import MovieModel
from app.models.genre import GenreModel
from app.models.movie_genre import MovieGenreModel
from app.models.rating import RatingModel
from app.models.user import UserModel
from app.models.short import ShortModel
from app.models.entity_type import EntityType
from app.schemas.common import Page, UserSummary
from app.schemas.movie import MovieDetail, MovieFilters, MovieSummary, RecentRating, Short
from app.services.pagination import build_page, count_rows, page_offset, paginate
from app.core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

RECENT_RATINGS_LIMIT = 5


class MovieService:

    def __init__(self, db: Session):
        self.db = db

    def get_movies(self, filters: MovieFilters) -> Page[MovieSummary]:
        """Filtered movie catalog, newest first"""
        stmt = select(MovieModel)
        if filters.year is not None:
            stmt = stmt.where(MovieModel.year == filters.year)
        if filters.type is not None:
            stmt = stmt.where(MovieModel.type == filters.type)
        if filters.genre:
            genre_movies = (
                select(MovieGenreModel.movie_id)
                .join(GenreModel, MovieGenreModel.genre_id == GenreModel.genre_id)
                .where(func.lower(GenreModel.name) == filters.genre.lower())
            )
            stmt = stmt.where(MovieModel.movie_id.in_(genre_movies))
        stmt = stmt.order_by(MovieModel.created_at.desc(), MovieModel.movie_id.desc())

        skip = page_offset(filters.page, filters.limit)
        total = count_rows(self.db, stmt)
        movies = self.db.execute(stmt.offset(skip).limit(filters.limit)).scalars().all()
        return build_page(self._summaries(movies), total, filters.page, filters.limit)

    def get_movie(self, movie_id: int) -> MovieDetail:
        """Movie detail with genres and the latest ratings; counts a view"""
        movie_model = self._get_movie_model(movie_id)
        self.db.execute(
            update(MovieModel)
            .where(MovieModel.movie_id == movie_id)
            .values(view_count=MovieModel.view_count + 1)
        )
        self.db.commit()
        self.db.refresh(movie_model)

        detail = MovieDetail.model_validate(movie_model)
        detail.genres = self._genre_map([movie_id]).get(movie_id, [])
        detail.recent_ratings = self._recent_ratings(movie_id)
        return detail

    def get_genres(self) -> List[str]:
        stmt = select(GenreModel.name).distinct().order_by(GenreModel.name)
        return list(self.db.execute(stmt).scalars().all())

    def get_trending(self, limit: int = 10) -> List[MovieSummary]:
        stmt = (
            select(MovieModel)
            .where(MovieModel.view_count > 0)
            .order_by(MovieModel.view_count.desc(), MovieModel.movie_id.desc())
            .limit(limit)
        )
        return self._summaries(self.db.execute(stmt).scalars().all())

    def search_movies(self, q: str, limit: int = 20) -> List[MovieSummary]:
        query = (q or "").strip()
        if len(query) < 2:
            raise BadRequestError("Search query must be at least 2 characters")
        pattern = f"%{query}%"
        stmt = (
            select(MovieModel)
            .where(
                or_(
                    MovieModel.title.ilike(pattern),
                    MovieModel.description.ilike(pattern),
                    MovieModel.director.ilike(pattern),
                )
            )
            .order_by(MovieModel.title)
            .limit(limit)
        )
        return self._summaries(self.db.execute(stmt).scalars().all())

    def get_shorts(self, page: int = 1, limit: int = 20) -> Page[Short]:
        stmt = select(ShortModel).order_by(ShortModel.created_at.desc(), ShortModel.short_id.desc())
        return paginate(self.db, stmt, page, limit, Short.model_validate)

    def get_short(self, short_id: int) -> Short:
        stmt = select(ShortModel).where(ShortModel.short_id == short_id)
        short_model = self.db.execute(stmt).scalar_one_or_none()
        if not short_model:
            raise NotFoundError("Short not found")
        return Short.model_validate(short_model)

    def get_summaries(self, movie_ids: List[int]) -> Dict[int, MovieSummary]:
        """Summaries keyed by id, used by watchlist and search"""
        if not movie_ids:
            return {}
        stmt = select(MovieModel).where(MovieModel.movie_id.in_(movie_ids))
        movies = self.db.execute(stmt).scalars().all()
        return {summary.movie_id: summary for summary in self._summaries(movies)}

    def _get_movie_model(self, movie_id: int) -> MovieModel:
        stmt = select(MovieModel).where(MovieModel.movie_id == movie_id)
        movie_model = self.db.execute(stmt).scalar_one_or_none()
        if not movie_model:
            raise NotFoundError("Movie not found")
        return movie_model

    def _summaries(self, movies) -> List[MovieSummary]:
        genre_map = self._genre_map([movie.movie_id for movie in movies])
        summaries = []
        for movie in movies:
            summary = MovieSummary.model_validate(movie)
            summary.genres = genre_map.get(movie.movie_id, [])
            summaries.append(summary)
        return summaries

    def _genre_map(self, movie_ids: List[int]) -> Dict[int, List[str]]:
        if not movie_ids:
            return {}
        stmt = (
            select(MovieGenreModel.movie_id, GenreModel.name)
            .join(GenreModel, MovieGenreModel.genre_id == GenreModel.genre_id)
            .where(MovieGenreModel.movie_id.in_(movie_ids))
            .order_by(GenreModel.name)
        )
        genre_map: Dict[int, List[str]] = {}
        for movie_id, name in self.db.execute(stmt).all():
            genre_map.setdefault(movie_id, []).append(name)
        return genre_map

    def _recent_ratings(self, movie_id: int) -> List[RecentRating]:
        stmt = (
            select(RatingModel, UserModel)
            .join(UserModel, RatingModel.user_id == UserModel.user_id)
            .where(
                RatingModel.entity_id == movie_id,
                RatingModel.entity_type == EntityType.movie.value,
            )
            .order_by(RatingModel.created_at.desc(), RatingModel.rating_id.desc())
            .limit(RECENT_RATINGS_LIMIT)
        )
        return [
            RecentRating(
                rating_id=rating.rating_id,
                rating=rating.rating,
                comment=rating.comment,
                created_at=rating.created_at,
                user=UserSummary.model_validate(user),
            )
            for rating, user in self.db.execute(stmt).all()
        ]
