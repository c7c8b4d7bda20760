# app/services/admin_service.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, delete
from app.models.user import UserModel
from app.models.session import SessionModel
from app.models.movie import MovieModel
from app.models.music import MusicModel
from app.models.short import ShortModel
from app.models.comment import CommentModel
from app.models.rating import RatingModel
from app.models.favorite import FavoriteModel
from app.models.watchlist import WatchlistModel
from app.models.history import HistoryModel
from app.models.upload import UploadModel
from app.models.moderation import BanModel, ModerationLogModel, ReportModel
from app.schemas.common import Page
from app.schemas.admin import (
    AdminUser,
    Ban,
    ModerationLog,
    PlatformStats,
    Report,
    ReportCreate,
    ReportResolve,
    UserStats,
)
from app.services.comment_service import CommentService
from app.services.pagination import build_page, count_rows, page_offset, paginate
from app.core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

BAN_DAYS = 30
REPORT_PENDING = "PENDING"
REPORT_RESOLVED = "RESOLVED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AdminService:
    """Moderation and platform statistics"""

    def __init__(self, db: Session):
        self.db = db

    def get_users(self, page: int = 1, limit: int = 20) -> Page[AdminUser]:
        stmt = select(UserModel).order_by(UserModel.created_at.desc(), UserModel.user_id.desc())
        total = count_rows(self.db, stmt)
        users = self.db.execute(stmt.offset(page_offset(page, limit)).limit(limit)).scalars().all()
        bans = self._active_bans([u.user_id for u in users])
        items = []
        for user_model in users:
            admin_user = AdminUser.model_validate(user_model)
            admin_user.banned_until = bans.get(user_model.user_id)
            items.append(admin_user)
        return build_page(items, total, page, limit)

    def get_user_stats(self, user_id: int) -> UserStats:
        self._get_user(user_id)

        def count(model) -> int:
            stmt = select(func.count()).select_from(model).where(model.user_id == user_id)
            return self.db.execute(stmt).scalar_one()

        return UserStats(
            comments=count(CommentModel),
            ratings=count(RatingModel),
            favorites=count(FavoriteModel),
            watchlist=count(WatchlistModel),
            history=count(HistoryModel),
            uploads=count(UploadModel),
        )

    def get_platform_stats(self) -> PlatformStats:
        def count(model) -> int:
            return self.db.execute(select(func.count()).select_from(model)).scalar_one()

        movies = count(MovieModel)
        music = count(MusicModel)
        shorts = count(ShortModel)
        return PlatformStats(
            users=count(UserModel),
            movies=movies,
            music=music,
            shorts=shorts,
            comments=count(CommentModel),
            ratings=count(RatingModel),
            total_content=movies + music + shorts,
        )

    def ban_user(self, admin_id: int, user_id: int, reason: Optional[str] = None) -> Ban:
        if admin_id == user_id:
            raise BadRequestError("You cannot ban yourself")
        self._get_user(user_id)
        ban_model = BanModel(
            user_id=user_id,
            reason=reason,
            banned_until=_utcnow() + timedelta(days=BAN_DAYS),
        )
        self.db.add(ban_model)
        # banned users lose their refresh sessions
        self.db.execute(delete(SessionModel).where(SessionModel.user_id == user_id))
        self._log("BAN_USER", user_id, "user", reason)
        self.db.commit()
        self.db.refresh(ban_model)
        logger.info("Admin %s banned user %s", admin_id, user_id)
        return Ban.model_validate(ban_model)

    def unban_user(self, admin_id: int, user_id: int) -> int:
        self._get_user(user_id)
        result = self.db.execute(delete(BanModel).where(BanModel.user_id == user_id))
        self._log("UNBAN_USER", user_id, "user", None)
        self.db.commit()
        logger.info("Admin %s unbanned user %s", admin_id, user_id)
        return result.rowcount

    def delete_comment(self, admin_id: int, comment_id: int, reason: Optional[str] = None) -> None:
        stmt = select(CommentModel.comment_id).where(CommentModel.comment_id == comment_id)
        if not self.db.execute(stmt).first():
            raise NotFoundError("Comment not found")
        self._log("DELETE_COMMENT", comment_id, "comment", reason)
        CommentService(self.db).remove_thread(comment_id)
        logger.info("Admin %s deleted comment %s", admin_id, comment_id)

    def get_moderation_logs(self, page: int = 1, limit: int = 20) -> Page[ModerationLog]:
        stmt = select(ModerationLogModel).order_by(
            ModerationLogModel.created_at.desc(), ModerationLogModel.log_id.desc()
        )
        return paginate(self.db, stmt, page, limit, ModerationLog.model_validate)

    def create_report(self, user_id: int, data: ReportCreate) -> Report:
        report_model = ReportModel(
            user_id=user_id,
            content_id=data.content_id,
            content_type=data.content_type,
            reason=data.reason,
            status=REPORT_PENDING,
        )
        self.db.add(report_model)
        self.db.commit()
        self.db.refresh(report_model)
        logger.info("User %s reported %s %s", user_id, data.content_type, data.content_id)
        return Report.model_validate(report_model)

    def get_reports(
        self, status: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Page[Report]:
        stmt = select(ReportModel)
        if status:
            stmt = stmt.where(ReportModel.status == status.upper())
        stmt = stmt.order_by(ReportModel.created_at.desc(), ReportModel.report_id.desc())
        return paginate(self.db, stmt, page, limit, Report.model_validate)

    def resolve_report(self, admin_id: int, report_id: int, data: ReportResolve) -> Report:
        stmt = select(ReportModel).where(ReportModel.report_id == report_id)
        report_model = self.db.execute(stmt).scalar_one_or_none()
        if not report_model:
            raise NotFoundError("Report not found")
        report_model.status = REPORT_RESOLVED
        report_model.resolution = data.resolution
        report_model.resolution_notes = data.notes
        report_model.resolved_at = _utcnow()
        self._log("RESOLVE_REPORT", report_id, "report", data.resolution)
        self.db.commit()
        self.db.refresh(report_model)
        logger.info("Admin %s resolved report %s", admin_id, report_id)
        return Report.model_validate(report_model)

    def _log(self, action: str, target_id: int, target_type: str, reason: Optional[str]) -> None:
        self.db.add(
            ModerationLogModel(
                action=action, target_id=target_id, target_type=target_type, reason=reason
            )
        )

    def _active_bans(self, user_ids) -> Dict[int, datetime]:
        if not user_ids:
            return {}
        stmt = (
            select(BanModel.user_id, func.max(BanModel.banned_until))
            .where(BanModel.user_id.in_(user_ids), BanModel.banned_until > _utcnow())
            .group_by(BanModel.user_id)
        )
        return dict(self.db.execute(stmt).all())

    def _get_user(self, user_id: int) -> UserModel:
        stmt = select(UserModel).where(UserModel.user_id == user_id)
        user_model = self.db.execute(stmt).scalar_one_or_none()
        if not user_model:
            raise NotFoundError("User not found")
        return user_model
