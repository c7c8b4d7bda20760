# app/models/upload.py

import enum
from sqlalchemy import Column, Integer, BigInteger, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from app.database import Base


class UploadStatus(str, enum.Enum):
    processing = "processing"
    ready = "ready"
    failed = "failed"


class UploadModel(Base):
    __tablename__ = "uploads"

    upload_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    title = Column(String(200), nullable=False)
    duration = Column(Integer, nullable=False, comment="Length in seconds")
    file_size = Column(BigInteger, nullable=False, comment="Bytes")
    mime_type = Column(String(100), nullable=False)
    status = Column(Enum(UploadStatus), default=UploadStatus.processing, nullable=False)
    stream_url = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp()
    )

    def __repr__(self):
        return f"<UploadModel(id={self.upload_id}, status={self.status})>"
