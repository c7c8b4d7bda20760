# app/services/playlist_service.py

import logging
from typing import Dict, List
from sqlalchemy.orm import Session
from sqlalchemy import select, func, delete
from app.models.playlist import PlaylistModel, PlaylistSongModel
from app.models.music import MusicModel
from app.schemas.common import Page
from app.schemas.music import (
    Music,
    PlaylistCreate,
    PlaylistDetail,
    PlaylistSong,
    PlaylistSummary,
    PlaylistUpdate,
)
from app.services.pagination import build_page, count_rows, page_offset
from app.core.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

PREVIEW_SIZE = 3


class PlaylistService:

    def __init__(self, db: Session):
        self.db = db

    def get_user_playlists(self, user_id: int, page: int = 1, limit: int = 20) -> Page[PlaylistSummary]:
        stmt = (
            select(PlaylistModel)
            .where(PlaylistModel.user_id == user_id)
            .order_by(PlaylistModel.updated_at.desc(), PlaylistModel.playlist_id.desc())
        )
        total = count_rows(self.db, stmt)
        playlists = (
            self.db.execute(stmt.offset(page_offset(page, limit)).limit(limit)).scalars().all()
        )
        ids = [p.playlist_id for p in playlists]
        counts = self._song_counts(ids)
        items = []
        for playlist in playlists:
            summary = PlaylistSummary.model_validate(playlist)
            summary.song_count = counts.get(playlist.playlist_id, 0)
            summary.preview = [
                Music.model_validate(music)
                for music, _ in self._songs(playlist.playlist_id, PREVIEW_SIZE)
            ]
            items.append(summary)
        return build_page(items, total, page, limit)

    def get_playlist(self, user_id: int, playlist_id: int) -> PlaylistDetail:
        playlist_model = self._get_owned(user_id, playlist_id)
        detail = PlaylistDetail.model_validate(playlist_model)
        detail.songs = [
            PlaylistSong.model_validate(music).model_copy(update={"added_at": added_at})
            for music, added_at in self._songs(playlist_id)
        ]
        return detail

    def create_playlist(self, user_id: int, data: PlaylistCreate) -> PlaylistDetail:
        playlist_model = PlaylistModel(
            user_id=user_id, title=data.title, description=data.description
        )
        self.db.add(playlist_model)
        self.db.commit()
        self.db.refresh(playlist_model)
        logger.info("User %s created playlist %s", user_id, playlist_model.playlist_id)
        return PlaylistDetail.model_validate(playlist_model)

    def update_playlist(self, user_id: int, playlist_id: int, data: PlaylistUpdate) -> PlaylistDetail:
        playlist_model = self._get_owned(user_id, playlist_id)
        if data.title is not None:
            playlist_model.title = data.title
        if data.description is not None:
            playlist_model.description = data.description
        self.db.commit()
        return self.get_playlist(user_id, playlist_id)

    def delete_playlist(self, user_id: int, playlist_id: int) -> None:
        playlist_model = self._get_owned(user_id, playlist_id)
        self.db.execute(delete(PlaylistSongModel).where(PlaylistSongModel.playlist_id == playlist_id))
        self.db.delete(playlist_model)
        self.db.commit()
        logger.info("User %s deleted playlist %s", user_id, playlist_id)

    def add_song(self, user_id: int, playlist_id: int, music_id: int) -> PlaylistDetail:
        """Add a track; adding one already present is a no-op"""
        playlist_model = self._get_owned(user_id, playlist_id)
        music_stmt = select(MusicModel.music_id).where(MusicModel.music_id == music_id)
        if not self.db.execute(music_stmt).first():
            raise NotFoundError("Music not found")

        link_stmt = select(PlaylistSongModel).where(
            PlaylistSongModel.playlist_id == playlist_id,
            PlaylistSongModel.music_id == music_id,
        )
        if not self.db.execute(link_stmt).scalar_one_or_none():
            self.db.add(PlaylistSongModel(playlist_id=playlist_id, music_id=music_id))
            playlist_model.updated_at = func.current_timestamp()
            self.db.commit()
        return self.get_playlist(user_id, playlist_id)

    def remove_song(self, user_id: int, playlist_id: int, music_id: int) -> PlaylistDetail:
        self._get_owned(user_id, playlist_id)
        self.db.execute(
            delete(PlaylistSongModel).where(
                PlaylistSongModel.playlist_id == playlist_id,
                PlaylistSongModel.music_id == music_id,
            )
        )
        self.db.commit()
        return self.get_playlist(user_id, playlist_id)

    def _get_owned(self, user_id: int, playlist_id: int) -> PlaylistModel:
        stmt = select(PlaylistModel).where(PlaylistModel.playlist_id == playlist_id)
        playlist_model = self.db.execute(stmt).scalar_one_or_none()
        if not playlist_model:
            raise NotFoundError("Playlist not found")
        if playlist_model.user_id != user_id:
            raise ForbiddenError("Not your playlist")
        return playlist_model

    def _songs(self, playlist_id: int, limit: int = None) -> List[tuple]:
        stmt = (
            select(MusicModel, PlaylistSongModel.added_at)
            .join(PlaylistSongModel, PlaylistSongModel.music_id == MusicModel.music_id)
            .where(PlaylistSongModel.playlist_id == playlist_id)
            .order_by(PlaylistSongModel.added_at.desc(), MusicModel.music_id.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        return self.db.execute(stmt).all()

    def _song_counts(self, playlist_ids: List[int]) -> Dict[int, int]:
        if not playlist_ids:
            return {}
        stmt = (
            select(PlaylistSongModel.playlist_id, func.count(PlaylistSongModel.music_id))
            .where(PlaylistSongModel.playlist_id.in_(playlist_ids))
            .group_by(PlaylistSongModel.playlist_id)
        )
        return dict(self.db.execute(stmt).all())
