# app/models/watchlist.py

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class WatchlistModel(Base):
    __tablename__ = "watchlists"

    watchlist_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    movie_id = Column(Integer, ForeignKey("movies.movie_id", ondelete="CASCADE"), nullable=False)
    added_at = Column(DateTime, default=func.current_timestamp())

    __table_args__ = (UniqueConstraint("user_id", "movie_id", name="unique_watchlist"),)

    def __repr__(self):
        return f"<WatchlistModel(user_id={self.user_id}, movie_id={self.movie_id})>"
