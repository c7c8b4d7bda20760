# app/services/upload_service.py

import logging
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from app.models.upload import UploadModel, UploadStatus
from app.models.music import MusicModel
from app.models.user import UserModel
from app.schemas.common import Page
from app.schemas.music import Music
from app.schemas.upload import Upload, UploadConvert, UploadCreate, UploadStats, UploadStatusUpdate
from app.services.notification_service import NotificationService
from app.services.pagination import paginate
from app.core.config import get_settings
from app.core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


class UploadService:
    """Music uploads owned by a user"""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def create_upload(self, user_id: int, data: UploadCreate) -> Upload:
        if data.mime_type not in self.settings.upload_mime_types:
            raise BadRequestError(
                f"Unsupported file type {data.mime_type}",
                errors=[{"field": "mimeType", "allowed": self.settings.upload_mime_types}],
            )
        if data.file_size > self.settings.max_file_size:
            raise BadRequestError(
                f"File exceeds the maximum size of {self.settings.max_file_size} bytes"
            )

        upload_model = UploadModel(
            user_id=user_id,
            title=data.title,
            duration=data.duration,
            file_size=data.file_size,
            mime_type=data.mime_type,
            status=UploadStatus.processing,
        )
        self.db.add(upload_model)
        self.db.commit()
        self.db.refresh(upload_model)
        logger.info("User %s created upload %s", user_id, upload_model.upload_id)
        return Upload.model_validate(upload_model)

    def get_uploads(self, user_id: int, page: int = 1, limit: int = 20) -> Page[Upload]:
        stmt = (
            select(UploadModel)
            .where(UploadModel.user_id == user_id)
            .order_by(UploadModel.created_at.desc(), UploadModel.upload_id.desc())
        )
        return paginate(self.db, stmt, page, limit, Upload.model_validate)

    def get_upload(self, user_id: int, upload_id: int) -> Upload:
        return Upload.model_validate(self._get_owned(user_id, upload_id))

    def update_status(self, user_id: int, upload_id: int, data: UploadStatusUpdate) -> Upload:
        upload_model = self._get_owned(user_id, upload_id)
        upload_model.status = data.status
        if data.stream_url is not None:
            upload_model.stream_url = data.stream_url
        self.db.commit()
        self.db.refresh(upload_model)
        logger.info("Upload %s is now %s", upload_id, data.status.value)
        return Upload.model_validate(upload_model)

    def delete_upload(self, user_id: int, upload_id: int) -> None:
        upload_model = self._get_owned(user_id, upload_id)
        self.db.delete(upload_model)
        self.db.commit()
        logger.info("User %s deleted upload %s", user_id, upload_id)

    def get_stats(self, user_id: int) -> UploadStats:
        stmt = (
            select(UploadModel.status, func.count(UploadModel.upload_id), func.sum(UploadModel.file_size))
            .where(UploadModel.user_id == user_id)
            .group_by(UploadModel.status)
        )
        counts = {status: 0 for status in UploadStatus}
        total_size = 0
        for status, count, size in self.db.execute(stmt).all():
            counts[UploadStatus(status)] = count
            total_size += size or 0
        return UploadStats(
            total=sum(counts.values()),
            processing=counts[UploadStatus.processing],
            ready=counts[UploadStatus.ready],
            failed=counts[UploadStatus.failed],
            total_size=total_size,
            total_size_mb=round(total_size / (1024 * 1024), 2),
        )

    def convert_to_music(self, user_id: int, upload_id: int, data: UploadConvert) -> Music:
        """Publish an upload as a catalog track and tell the uploader's followers"""
        upload_model = self._get_owned(user_id, upload_id)
        if upload_model.status == UploadStatus.failed:
            raise BadRequestError("Failed uploads cannot be published")
        stream_url = data.stream_url or upload_model.stream_url

        artist = data.artist
        if not artist:
            artist = self.db.execute(
                select(UserModel.username).where(UserModel.user_id == user_id)
            ).scalar_one()

        music_model = MusicModel(
            title=upload_model.title,
            artist=artist,
            album=data.album,
            genre=data.genre,
            duration=upload_model.duration,
            cover_url=data.cover_url,
            stream_url=stream_url,
            uploader_id=user_id,
        )
        self.db.add(music_model)
        upload_model.status = UploadStatus.ready
        upload_model.stream_url = stream_url
        self.db.commit()
        self.db.refresh(music_model)
        logger.info("Upload %s published as music %s", upload_id, music_model.music_id)

        NotificationService(self.db).notify_followers(
            user_id,
            type="new_music",
            title="New music",
            message=f"{artist} published {music_model.title}",
            related_entity_id=music_model.music_id,
        )
        return Music.model_validate(music_model)

    def _get_owned(self, user_id: int, upload_id: int) -> UploadModel:
        stmt = select(UploadModel).where(
            UploadModel.upload_id == upload_id, UploadModel.user_id == user_id
        )
        upload_model = self.db.execute(stmt).scalar_one_or_none()
        if not upload_model:
            raise NotFoundError("Upload not found")
        return upload_model
