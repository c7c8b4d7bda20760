# app/schemas/music.py

from typing import List, Optional
from datetime import date, datetime
from pydantic import Field
from app.schemas.common import CamelModel


class Music(CamelModel):
    music_id: int = Field(description="Track ID")
    title: str = Field(description="Title")
    artist: str = Field(description="Artist")
    album: Optional[str] = None
    genre: Optional[str] = None
    duration: Optional[int] = Field(default=None, description="Length in seconds")
    cover_url: Optional[str] = None
    stream_url: Optional[str] = None
    plays: int = 0
    likes: int = 0
    release_date: Optional[date] = None
    uploader_id: Optional[int] = None
    created_at: Optional[datetime] = None


class PlaylistCreate(CamelModel):
    title: str = Field(min_length=1, max_length=100, description="Playlist title")
    description: Optional[str] = Field(default=None, max_length=500)


class PlaylistUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class PlaylistSongRequest(CamelModel):
    music_id: int = Field(description="Track to add")


class PlaylistSong(Music):
    added_at: Optional[datetime] = None


class PlaylistSummary(CamelModel):
    """Playlist row with song count and a short preview"""

    playlist_id: int
    user_id: int
    title: str
    description: Optional[str] = None
    song_count: int = 0
    preview: List[Music] = Field(default_factory=list, description="Three most recent songs")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PlaylistDetail(CamelModel):
    playlist_id: int
    user_id: int
    title: str
    description: Optional[str] = None
    songs: List[PlaylistSong] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
