# app/api/v1/admin.py

from typing import Optional
from fastapi import APIRouter, Body, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.admin import BanRequest, ModerationReason, ReportCreate, ReportResolve
from app.schemas.user import User
from app.services.admin_service import AdminService
from app.core.dependencies import get_current_admin, get_current_user
from app.core.response import send_response

router = APIRouter()


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(db)


@router.get("/users", summary="All users")
def get_users(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    return send_response(request, 200, "Users retrieved", admin_service.get_users(page, limit))


@router.get("/users/{user_id}/stats", summary="User stats")
def get_user_stats(
    request: Request,
    user_id: int = Path(description="User ID"),
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    return send_response(request, 200, "User stats", admin_service.get_user_stats(user_id))


@router.post("/users/{user_id}/ban", summary="Ban user", description="Bans for 30 days.")
def ban_user(
    request: Request,
    user_id: int = Path(description="User ID"),
    ban_data: Optional[BanRequest] = Body(default=None),
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    reason = ban_data.reason if ban_data else None
    ban = admin_service.ban_user(admin.user_id, user_id, reason)
    return send_response(request, 200, "User banned", ban)


@router.delete("/users/{user_id}/ban", summary="Unban user")
def unban_user(
    request: Request,
    user_id: int = Path(description="User ID"),
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    removed = admin_service.unban_user(admin.user_id, user_id)
    return send_response(request, 200, "User unbanned", {"removed": removed})


@router.get("/stats", summary="Platform stats")
def get_platform_stats(
    request: Request,
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    return send_response(request, 200, "Platform stats", admin_service.get_platform_stats())


@router.delete("/comments/{comment_id}", summary="Remove comment")
def delete_comment(
    request: Request,
    comment_id: int = Path(description="Comment ID"),
    reason_data: Optional[ModerationReason] = Body(default=None),
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    reason = reason_data.reason if reason_data else None
    admin_service.delete_comment(admin.user_id, comment_id, reason)
    return send_response(request, 200, "Comment removed")


@router.get("/moderation-logs", summary="Moderation logs")
def get_moderation_logs(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    logs = admin_service.get_moderation_logs(page, limit)
    return send_response(request, 200, "Moderation logs", logs)


@router.post(
    "/reports",
    summary="Report content",
    description="Any signed-in user can report content for review.",
)
def create_report(
    request: Request,
    report_data: ReportCreate,
    current_user: User = Depends(get_current_user),
    admin_service: AdminService = Depends(get_admin_service),
):
    report = admin_service.create_report(current_user.user_id, report_data)
    return send_response(request, 201, "Report submitted", report)


@router.get("/reports", summary="Content reports")
def get_reports(
    request: Request,
    status: Optional[str] = Query(default=None, description="PENDING or RESOLVED"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    reports = admin_service.get_reports(status, page, limit)
    return send_response(request, 200, "Reports retrieved", reports)


@router.patch("/reports/{report_id}/resolve", summary="Resolve report")
def resolve_report(
    request: Request,
    resolve_data: ReportResolve,
    report_id: int = Path(description="Report ID"),
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    report = admin_service.resolve_report(admin.user_id, report_id, resolve_data)
    return send_response(request, 200, "Report resolved", report)
