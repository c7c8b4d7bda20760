# app/api/v1/notifications.py

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.notification import UnreadCount
from app.schemas.user import User
from app.services.notification_service import NotificationService
from app.core.dependencies import get_current_user
from app.core.response import send_response

router = APIRouter()


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


@router.get("", summary="My notifications")
def get_notifications(
    request: Request,
    unread_only: bool = Query(default=False, alias="unreadOnly"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
):
    notifications = notification_service.get_notifications(
        current_user.user_id, unread_only, page, limit
    )
    return send_response(request, 200, "Notifications retrieved", notifications)


@router.get("/unread-count", summary="Unread count")
def get_unread_count(
    request: Request,
    current_user: User = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
):
    unread = notification_service.get_unread_count(current_user.user_id)
    return send_response(request, 200, "Unread count", UnreadCount(unread=unread))


@router.patch("/read-all", summary="Mark all read")
def mark_all_read(
    request: Request,
    current_user: User = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
):
    updated = notification_service.mark_all_as_read(current_user.user_id)
    return send_response(request, 200, "All notifications read", {"updated": updated})


@router.patch("/{notification_id}/read", summary="Mark read")
def mark_read(
    request: Request,
    notification_id: int = Path(description="Notification ID"),
    current_user: User = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
):
    notification = notification_service.mark_as_read(current_user.user_id, notification_id)
    return send_response(request, 200, "Notification read", notification)


@router.delete("/{notification_id}", summary="Delete notification")
def delete_notification(
    request: Request,
    notification_id: int = Path(description="Notification ID"),
    current_user: User = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
):
    notification_service.delete(current_user.user_id, notification_id)
    return send_response(request, 200, "Notification deleted")
