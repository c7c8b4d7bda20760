# app/models/comment.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.database import Base


class CommentModel(Base):
    __tablename__ = "comments"

    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    entity_id = Column(Integer, nullable=False)
    entity_type = Column(String(20), nullable=False)
    parent_id = Column(
        Integer, ForeignKey("comments.comment_id", ondelete="CASCADE"), nullable=True
    )
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp()
    )

    def __repr__(self):
        return f"<CommentModel(id={self.comment_id}, {self.entity_type}={self.entity_id})>"
