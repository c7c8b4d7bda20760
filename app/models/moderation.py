# app/models/moderation.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.database import Base


class ReportModel(Base):
    __tablename__ = "reports"

    report_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    content_id = Column(Integer, nullable=False)
    content_type = Column(String(20), nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String(20), default="PENDING", nullable=False)
    resolution = Column(String(100), nullable=True)
    resolution_notes = Column(Text, nullable=True)
    resolved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.current_timestamp())

    def __repr__(self):
        return f"<ReportModel(id={self.report_id}, status='{self.status}')>"


class BanModel(Base):
    __tablename__ = "bans"

    ban_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    reason = Column(Text, nullable=True)
    banned_until = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=func.current_timestamp())

    def __repr__(self):
        return f"<BanModel(user_id={self.user_id}, banned_until={self.banned_until})>"


class ModerationLogModel(Base):
    __tablename__ = "moderation_logs"

    log_id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(50), nullable=False)
    target_id = Column(Integer, nullable=False)
    target_type = Column(String(20), nullable=False)
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.current_timestamp())

    def __repr__(self):
        return f"<ModerationLogModel(action='{self.action}', target_id={self.target_id})>"
