# app/schemas/notification.py

from typing import Optional
from datetime import datetime
from app.schemas.common import CamelModel


class Notification(CamelModel):
    notification_id: int
    user_id: int
    type: str
    title: str
    message: str
    related_entity_id: Optional[int] = None
    is_read: bool = False
    created_at: Optional[datetime] = None


class UnreadCount(CamelModel):
    unread: int
