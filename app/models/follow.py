# app/models/follow.py

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class FollowModel(Base):
    __tablename__ = "follows"

    follower_id = Column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True
    )  # the user who follows
    following_id = Column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True
    )  # the user being followed
    created_at = Column(DateTime, default=func.current_timestamp())

    __table_args__ = (UniqueConstraint("follower_id", "following_id", name="unique_follow"),)

    def __repr__(self):
        return f"<FollowModel(follower_id={self.follower_id}, following_id={self.following_id})>"
