# app/models/favorite.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class FavoriteModel(Base):
    __tablename__ = "favorites"

    favorite_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    entity_id = Column(Integer, nullable=False)
    entity_type = Column(String(20), nullable=False)
    added_at = Column(DateTime, default=func.current_timestamp())

    __table_args__ = (
        UniqueConstraint("user_id", "entity_id", "entity_type", name="unique_favorite"),
    )

    def __repr__(self):
        return f"<FavoriteModel(user_id={self.user_id}, {self.entity_type}={self.entity_id})>"
