# app/services/search_service.py

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, or_
from app.models.entity_type import EntityType
from app.models.movie import MovieModel
from app.models.music import MusicModel
from app.models.short import ShortModel
from app.models.history import HistoryModel
from app.models.favorite import FavoriteModel
from app.schemas.common import Page
from app.schemas.music import Music
from app.schemas.movie import MovieSummary
from app.schemas.search import SearchResult
from app.services.movie_service import MovieService
from app.services.pagination import build_page, count_rows, page_offset, paginate
from app.core.exceptions import BadRequestError

logger = logging.getLogger(__name__)

RECENT_HISTORY_WINDOW = 20


class SearchService:

    def __init__(self, db: Session):
        self.db = db

    def search(
        self,
        q: str,
        type: Optional[EntityType] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[SearchResult]:
        """Search movies, music and shorts; each type is paged independently"""
        query = (q or "").strip()
        if len(query) < 2:
            raise BadRequestError("Search query must be at least 2 characters")
        pattern = f"%{query}%"
        skip = page_offset(page, limit)

        statements = {
            EntityType.movie: (
                select(MovieModel)
                .where(or_(MovieModel.title.ilike(pattern), MovieModel.description.ilike(pattern)))
                .order_by(MovieModel.view_count.desc(), MovieModel.movie_id.desc()),
                self._movie_hit,
            ),
            EntityType.music: (
                select(MusicModel)
                .where(
                    or_(
                        MusicModel.title.ilike(pattern),
                        MusicModel.artist.ilike(pattern),
                        MusicModel.album.ilike(pattern),
                    )
                )
                .order_by(MusicModel.plays.desc(), MusicModel.music_id.desc()),
                self._music_hit,
            ),
            EntityType.short: (
                select(ShortModel)
                .where(or_(ShortModel.title.ilike(pattern), ShortModel.description.ilike(pattern)))
                .order_by(ShortModel.views.desc(), ShortModel.short_id.desc()),
                self._short_hit,
            ),
        }
        if type is not None:
            statements = {type: statements[EntityType(type)]}

        items: List[SearchResult] = []
        total = 0
        has_more = False
        for stmt, to_hit in statements.values():
            type_total = count_rows(self.db, stmt)
            rows = self.db.execute(stmt.offset(skip).limit(limit)).scalars().all()
            items.extend(to_hit(row) for row in rows)
            total += type_total
            has_more = has_more or skip + len(rows) < type_total

        result = build_page(items, total, page, limit)
        result.has_more = has_more
        return result

    def get_trending_movies(self, page: int = 1, limit: int = 20) -> Page[MovieSummary]:
        stmt = (
            select(MovieModel)
            .where(MovieModel.view_count > 0)
            .order_by(MovieModel.view_count.desc(), MovieModel.movie_id.desc())
        )
        total = count_rows(self.db, stmt)
        rows = self.db.execute(stmt.offset(page_offset(page, limit)).limit(limit)).scalars().all()
        summaries = MovieService(self.db).get_summaries([row.movie_id for row in rows])
        return build_page([summaries[row.movie_id] for row in rows], total, page, limit)

    def get_trending_music(self, page: int = 1, limit: int = 20) -> Page[Music]:
        stmt = (
            select(MusicModel)
            .where(MusicModel.plays > 0)
            .order_by(MusicModel.plays.desc(), MusicModel.music_id.desc())
        )
        return paginate(self.db, stmt, page, limit, Music.model_validate)

    def get_recommendations(self, user_id: int, limit: int = 20) -> List[SearchResult]:
        """Popular items of the types the user watched recently, minus what they saw"""
        history_stmt = (
            select(HistoryModel.entity_type, HistoryModel.entity_id)
            .where(HistoryModel.user_id == user_id)
            .order_by(HistoryModel.watched_at.desc(), HistoryModel.history_id.desc())
            .limit(RECENT_HISTORY_WINDOW)
        )
        recent = self.db.execute(history_stmt).all()
        seen = {(entity_type, entity_id) for entity_type, entity_id in recent}
        favorite_stmt = select(FavoriteModel.entity_type, FavoriteModel.entity_id).where(
            FavoriteModel.user_id == user_id
        )
        seen.update(tuple(row) for row in self.db.execute(favorite_stmt).all())

        types = []
        for entity_type, _ in recent:
            if entity_type not in types:
                types.append(entity_type)
        if not types:
            types = [t.value for t in EntityType]

        popular = {
            EntityType.movie.value: (
                select(MovieModel).order_by(MovieModel.view_count.desc(), MovieModel.movie_id.desc()),
                self._movie_hit,
            ),
            EntityType.music.value: (
                select(MusicModel).order_by(MusicModel.plays.desc(), MusicModel.music_id.desc()),
                self._music_hit,
            ),
            EntityType.short.value: (
                select(ShortModel).order_by(ShortModel.views.desc(), ShortModel.short_id.desc()),
                self._short_hit,
            ),
        }

        results: List[SearchResult] = []
        for entity_type in types:
            stmt, to_hit = popular[entity_type]
            for row in self.db.execute(stmt.limit(limit + len(seen))).scalars().all():
                hit = to_hit(row)
                if (hit.type.value, hit.id) in seen:
                    continue
                results.append(hit)
                if len(results) >= limit:
                    return results
        return results

    @staticmethod
    def _movie_hit(movie: MovieModel) -> SearchResult:
        return SearchResult(
            type=EntityType.movie,
            id=movie.movie_id,
            title=movie.title,
            subtitle=movie.director,
            image_url=movie.poster_url,
        )

    @staticmethod
    def _music_hit(music: MusicModel) -> SearchResult:
        return SearchResult(
            type=EntityType.music,
            id=music.music_id,
            title=music.title,
            subtitle=music.artist,
            image_url=music.cover_url,
        )

    @staticmethod
    def _short_hit(short: ShortModel) -> SearchResult:
        return SearchResult(
            type=EntityType.short,
            id=short.short_id,
            title=short.title,
            subtitle=short.description,
            image_url=short.thumbnail_url,
        )
