# app/models/short.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.database import Base


class ShortModel(Base):
    __tablename__ = "shorts"

    short_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    video_url = Column(Text, nullable=False)
    thumbnail_url = Column(Text, nullable=True)
    duration = Column(Integer, nullable=True, comment="Length in seconds")
    creator_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    likes = Column(Integer, default=0, nullable=False)
    views = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=func.current_timestamp())

    def __repr__(self):
        return f"<ShortModel(short_id={self.short_id}, title='{self.title}')>"
