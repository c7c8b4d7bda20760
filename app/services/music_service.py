# app/services/music_service.py

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, or_, update
from app.models.music import MusicModel
from app.schemas.common import Page
from app.schemas.music import Music
from app.services.pagination import paginate
from app.core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


class MusicService:

    def __init__(self, db: Session):
        self.db = db

    def get_music(
        self,
        artist: Optional[str] = None,
        genre: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[Music]:
        """Music catalog filtered by artist or genre substring"""
        stmt = select(MusicModel)
        if artist:
            stmt = stmt.where(MusicModel.artist.ilike(f"%{artist}%"))
        if genre:
            stmt = stmt.where(MusicModel.genre.ilike(f"%{genre}%"))
        stmt = stmt.order_by(MusicModel.created_at.desc(), MusicModel.music_id.desc())
        return paginate(self.db, stmt, page, limit, Music.model_validate)

    def get_music_by_id(self, music_id: int) -> Music:
        return Music.model_validate(self._get_music_model(music_id))

    def get_trending(self, limit: int = 10) -> List[Music]:
        stmt = (
            select(MusicModel)
            .order_by(MusicModel.plays.desc(), MusicModel.music_id.desc())
            .limit(limit)
        )
        return [Music.model_validate(m) for m in self.db.execute(stmt).scalars().all()]

    def get_artists(self) -> List[str]:
        stmt = select(MusicModel.artist).distinct().order_by(MusicModel.artist)
        return list(self.db.execute(stmt).scalars().all())

    def get_genres(self) -> List[str]:
        stmt = (
            select(MusicModel.genre)
            .where(MusicModel.genre.is_not(None))
            .distinct()
            .order_by(MusicModel.genre)
        )
        return list(self.db.execute(stmt).scalars().all())

    def search_music(self, q: str, page: int = 1, limit: int = 20) -> Page[Music]:
        query = (q or "").strip()
        if len(query) < 2:
            raise BadRequestError("Search query must be at least 2 characters")
        pattern = f"%{query}%"
        stmt = (
            select(MusicModel)
            .where(
                or_(
                    MusicModel.title.ilike(pattern),
                    MusicModel.artist.ilike(pattern),
                    MusicModel.album.ilike(pattern),
                )
            )
            .order_by(MusicModel.plays.desc(), MusicModel.music_id.desc())
        )
        return paginate(self.db, stmt, page, limit, Music.model_validate)

    def increment_play_count(self, music_id: int) -> Music:
        music_model = self._get_music_model(music_id)
        self.db.execute(
            update(MusicModel)
            .where(MusicModel.music_id == music_id)
            .values(plays=MusicModel.plays + 1)
        )
        self.db.commit()
        self.db.refresh(music_model)
        return Music.model_validate(music_model)

    def _get_music_model(self, music_id: int) -> MusicModel:
        stmt = select(MusicModel).where(MusicModel.music_id == music_id)
        music_model = self.db.execute(stmt).scalar_one_or_none()
        if not music_model:
            raise NotFoundError("Music not found")
        return music_model
