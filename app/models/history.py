# app/models/history.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class HistoryModel(Base):
    __tablename__ = "history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    entity_id = Column(Integer, nullable=False)
    entity_type = Column(String(20), nullable=False)
    progress = Column(Integer, default=0, nullable=False, comment="Seconds watched")
    duration = Column(Integer, nullable=False, comment="Total length in seconds")
    watched_at = Column(DateTime, default=func.current_timestamp())

    __table_args__ = (
        UniqueConstraint("user_id", "entity_id", "entity_type", name="unique_history"),
    )

    def __repr__(self):
        return f"<HistoryModel(user_id={self.user_id}, {self.entity_type}={self.entity_id})>"
