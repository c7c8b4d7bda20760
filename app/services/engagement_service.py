# app/services/engagement_service.py

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, delete
from sqlalchemy.exc import IntegrityError
from app.models.entity_type import EntityType
from app.models.rating import RatingModel
from app.models.favorite import FavoriteModel
from app.models.watchlist import WatchlistModel
from app.models.history import HistoryModel
from app.models.movie import MovieModel
from app.schemas.common import Page
from app.schemas.engagement import (
    EngagementStats,
    Favorite,
    HistoryCreate,
    HistoryEntry,
    Rating,
    RatingCreate,
    RatingSummary,
    WatchlistEntry,
    WatchProgress,
)
from app.services.catalog import ensure_entity
from app.services.movie_service import MovieService
from app.services.pagination import build_page, count_rows, page_offset, paginate
from app.core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class EngagementService:
    """Ratings, favorites, watchlist and watch history of one user"""

    def __init__(self, db: Session):
        self.db = db

    # ratings

    def rate(self, user_id: int, data: RatingCreate) -> Rating:
        if not isinstance(data.rating, int) or not MIN_RATING <= data.rating <= MAX_RATING:
            raise BadRequestError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        ensure_entity(self.db, data.entity_id, data.entity_type)

        key = self._key(RatingModel, user_id, data.entity_id, data.entity_type)
        rating_model = self._upsert(
            RatingModel,
            key,
            {"rating": data.rating, "comment": data.comment},
            user_id=user_id,
            entity_id=data.entity_id,
            entity_type=EntityType(data.entity_type).value,
        )
        logger.info(
            "User %s rated %s %s: %s", user_id, data.entity_type.value, data.entity_id, data.rating
        )
        return Rating.model_validate(rating_model)

    def get_user_rating(self, user_id: int, entity_id: int, entity_type: EntityType) -> Rating:
        stmt = select(RatingModel).where(*self._key(RatingModel, user_id, entity_id, entity_type))
        rating_model = self.db.execute(stmt).scalar_one_or_none()
        if not rating_model:
            raise NotFoundError("Rating not found")
        return Rating.model_validate(rating_model)

    def remove_rating(self, user_id: int, entity_id: int, entity_type: EntityType) -> None:
        self._delete(RatingModel, user_id, entity_id, entity_type)

    def get_rating_summary(self, entity_id: int, entity_type: EntityType) -> RatingSummary:
        stmt = (
            select(RatingModel.rating, func.count(RatingModel.rating_id))
            .where(
                RatingModel.entity_id == entity_id,
                RatingModel.entity_type == EntityType(entity_type).value,
            )
            .group_by(RatingModel.rating)
        )
        distribution = {score: 0 for score in range(MIN_RATING, MAX_RATING + 1)}
        for score, count in self.db.execute(stmt).all():
            distribution[score] = count
        count = sum(distribution.values())
        total = sum(score * n for score, n in distribution.items())
        average = round(total / count, 1) if count else 0.0
        return RatingSummary(count=count, average=average, distribution=distribution)

    # favorites

    def add_favorite(self, user_id: int, entity_id: int, entity_type: EntityType) -> Favorite:
        ensure_entity(self.db, entity_id, entity_type)
        favorite_model = self._upsert(
            FavoriteModel,
            self._key(FavoriteModel, user_id, entity_id, entity_type),
            {},
            user_id=user_id,
            entity_id=entity_id,
            entity_type=EntityType(entity_type).value,
        )
        return Favorite.model_validate(favorite_model)

    def remove_favorite(self, user_id: int, entity_id: int, entity_type: EntityType) -> None:
        self._delete(FavoriteModel, user_id, entity_id, entity_type)

    def get_favorites(
        self,
        user_id: int,
        entity_type: Optional[EntityType] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[Favorite]:
        stmt = select(FavoriteModel).where(FavoriteModel.user_id == user_id)
        if entity_type is not None:
            stmt = stmt.where(FavoriteModel.entity_type == EntityType(entity_type).value)
        stmt = stmt.order_by(FavoriteModel.added_at.desc(), FavoriteModel.favorite_id.desc())
        return paginate(self.db, stmt, page, limit, Favorite.model_validate)

    def is_favorited(self, user_id: int, entity_id: int, entity_type: EntityType) -> bool:
        stmt = select(FavoriteModel.favorite_id).where(
            *self._key(FavoriteModel, user_id, entity_id, entity_type)
        )
        return self.db.execute(stmt).first() is not None

    # watchlist

    def add_to_watchlist(self, user_id: int, movie_id: int) -> WatchlistEntry:
        ensure_entity(self.db, movie_id, EntityType.movie)
        watchlist_model = self._upsert(
            WatchlistModel,
            (WatchlistModel.user_id == user_id, WatchlistModel.movie_id == movie_id),
            {},
            user_id=user_id,
            movie_id=movie_id,
        )
        entry = WatchlistEntry.model_validate(watchlist_model)
        entry.movie = MovieService(self.db).get_summaries([movie_id]).get(movie_id)
        return entry

    def remove_from_watchlist(self, user_id: int, movie_id: int) -> None:
        self.db.execute(
            delete(WatchlistModel).where(
                WatchlistModel.user_id == user_id, WatchlistModel.movie_id == movie_id
            )
        )
        self.db.commit()

    def get_watchlist(self, user_id: int, page: int = 1, limit: int = 20) -> Page[WatchlistEntry]:
        stmt = (
            select(WatchlistModel)
            .where(WatchlistModel.user_id == user_id)
            .order_by(WatchlistModel.added_at.desc(), WatchlistModel.watchlist_id.desc())
        )
        total = count_rows(self.db, stmt)
        rows = self.db.execute(stmt.offset(page_offset(page, limit)).limit(limit)).scalars().all()
        movies = MovieService(self.db).get_summaries([row.movie_id for row in rows])
        items = []
        for row in rows:
            entry = WatchlistEntry.model_validate(row)
            entry.movie = movies.get(row.movie_id)
            items.append(entry)
        return build_page(items, total, page, limit)

    def is_in_watchlist(self, user_id: int, movie_id: int) -> bool:
        stmt = select(WatchlistModel.watchlist_id).where(
            WatchlistModel.user_id == user_id, WatchlistModel.movie_id == movie_id
        )
        return self.db.execute(stmt).first() is not None

    # history

    def update_history(self, user_id: int, data: HistoryCreate) -> HistoryEntry:
        """Record playback progress; the latest call wins"""
        ensure_entity(self.db, data.entity_id, data.entity_type)
        history_model = self._upsert(
            HistoryModel,
            self._key(HistoryModel, user_id, data.entity_id, data.entity_type),
            {
                "progress": data.progress,
                "duration": data.duration,
                "watched_at": func.current_timestamp(),
            },
            user_id=user_id,
            entity_id=data.entity_id,
            entity_type=EntityType(data.entity_type).value,
        )
        return HistoryEntry.model_validate(history_model)

    def get_history(
        self,
        user_id: int,
        entity_type: Optional[EntityType] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[HistoryEntry]:
        stmt = select(HistoryModel).where(HistoryModel.user_id == user_id)
        if entity_type is not None:
            stmt = stmt.where(HistoryModel.entity_type == EntityType(entity_type).value)
        stmt = stmt.order_by(HistoryModel.watched_at.desc(), HistoryModel.history_id.desc())
        return paginate(self.db, stmt, page, limit, HistoryEntry.model_validate)

    def get_watch_progress(
        self, user_id: int, entity_id: int, entity_type: EntityType
    ) -> WatchProgress:
        stmt = select(HistoryModel).where(
            *self._key(HistoryModel, user_id, entity_id, entity_type)
        )
        history_model = self.db.execute(stmt).scalar_one_or_none()
        if not history_model:
            raise NotFoundError("No watch progress recorded")
        duration = history_model.duration or 0
        percentage = round(history_model.progress / duration * 100, 1) if duration else 0.0
        return WatchProgress(
            progress=history_model.progress,
            duration=history_model.duration,
            percentage=percentage,
            last_watched=history_model.watched_at,
        )

    def clear_history(self, user_id: int) -> int:
        result = self.db.execute(delete(HistoryModel).where(HistoryModel.user_id == user_id))
        self.db.commit()
        logger.info("Cleared %d history entries for user %s", result.rowcount, user_id)
        return result.rowcount

    # stats

    def get_stats(self, user_id: int) -> EngagementStats:
        def count(model, pk) -> int:
            stmt = select(func.count(pk)).where(model.user_id == user_id)
            return self.db.execute(stmt).scalar_one()

        seconds_stmt = select(func.coalesce(func.sum(HistoryModel.progress), 0)).where(
            HistoryModel.user_id == user_id
        )
        seconds = self.db.execute(seconds_stmt).scalar_one()
        return EngagementStats(
            favorites=count(FavoriteModel, FavoriteModel.favorite_id),
            ratings=count(RatingModel, RatingModel.rating_id),
            watchlist=count(WatchlistModel, WatchlistModel.watchlist_id),
            history_entries=count(HistoryModel, HistoryModel.history_id),
            total_minutes_watched=round(seconds / 60),
        )

    # helpers

    @staticmethod
    def _key(model, user_id: int, entity_id: int, entity_type: EntityType) -> tuple:
        return (
            model.user_id == user_id,
            model.entity_id == entity_id,
            model.entity_type == EntityType(entity_type).value,
        )

    def _upsert(self, model, key: tuple, values: dict, **identity):
        """Update the row matching the unique key, insert it when missing"""
        stmt = select(model).where(*key)
        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            row = model(**identity, **values)
            self.db.add(row)
            try:
                self.db.commit()
            except IntegrityError:
                # lost a race with a concurrent insert of the same key
                self.db.rollback()
                row = self.db.execute(stmt).scalar_one()
                for field, value in values.items():
                    setattr(row, field, value)
                self.db.commit()
        else:
            for field, value in values.items():
                setattr(row, field, value)
            self.db.commit()
        self.db.refresh(row)
        return row

    def _delete(self, model, user_id: int, entity_id: int, entity_type: EntityType) -> None:
        self.db.execute(delete(model).where(*self._key(model, user_id, entity_id, entity_type)))
        self.db.commit()
