# app/models/playlist.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class PlaylistModel(Base):
    __tablename__ = "playlists"

    playlist_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp()
    )

    def __repr__(self):
        return f"<PlaylistModel(id={self.playlist_id}, title='{self.title}')>"


class PlaylistSongModel(Base):
    __tablename__ = "playlist_songs"

    playlist_id = Column(
        Integer, ForeignKey("playlists.playlist_id", ondelete="CASCADE"), primary_key=True
    )
    music_id = Column(Integer, ForeignKey("music.music_id", ondelete="CASCADE"), primary_key=True)
    added_at = Column(DateTime, default=func.current_timestamp())

    __table_args__ = (UniqueConstraint("playlist_id", "music_id", name="unique_playlist_song"),)

    def __repr__(self):
        return f"<PlaylistSongModel(playlist_id={self.playlist_id}, music_id={self.music_id})>"
