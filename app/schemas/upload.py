# app/schemas/upload.py

from typing import Optional
from datetime import datetime
from pydantic import Field
from app.models.upload import UploadStatus
from app.schemas.common import CamelModel


class UploadCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    duration: int = Field(ge=1, description="Length in seconds")
    file_size: int = Field(ge=1, description="Bytes")
    mime_type: str = Field(description="Audio MIME type")


class UploadStatusUpdate(CamelModel):
    status: UploadStatus
    stream_url: Optional[str] = None


class UploadConvert(CamelModel):
    artist: Optional[str] = Field(default=None, max_length=255, description="Defaults to uploader")
    album: Optional[str] = None
    genre: Optional[str] = None
    cover_url: Optional[str] = None
    stream_url: Optional[str] = Field(default=None, description="Defaults to the upload stream url")


class Upload(CamelModel):
    upload_id: int
    user_id: int
    title: str
    duration: int
    file_size: int
    mime_type: str
    status: UploadStatus
    stream_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UploadStats(CamelModel):
    total: int
    processing: int
    ready: int
    failed: int
    total_size: int
    total_size_mb: float
