# app/models/music.py

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.database import Base


class MusicModel(Base):
    __tablename__ = "music"

    music_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    artist = Column(String(255), nullable=False)
    album = Column(String(255), nullable=True)
    genre = Column(String(100), nullable=True)
    duration = Column(Integer, nullable=True, comment="Length in seconds")
    cover_url = Column(Text, nullable=True)
    stream_url = Column(Text, nullable=True)
    plays = Column(Integer, default=0, nullable=False)
    likes = Column(Integer, default=0, nullable=False)
    release_date = Column(Date, nullable=True)
    uploader_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    created_at = Column(DateTime, default=func.current_timestamp())

    def __repr__(self):
        return f"<MusicModel(music_id={self.music_id}, title='{self.title}')>"
