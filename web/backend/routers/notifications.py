#!/usr/bin/env python3
"""
Notification endpoints - the caller's in-app inbox.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.config_loader import AppConfig
from ..dependencies import get_db, get_app_config, get_current_user_id
from ..services.notification_service import NotificationInboxService
from ..models.requests import MarkReadRequest
from ..models.responses import (
    NotificationsResponse,
    UnreadCountResponse,
    MarkReadResponse,
    MessageResponse
)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def get_notification_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
) -> NotificationInboxService:
    """Dependency to get notification service."""
    return NotificationInboxService(db, max_page_size=config.matching.max_page_size)


@router.get("", response_model=NotificationsResponse)
def list_notifications(
    page: int = Query(default=1),
    limit: int = Query(default=20),
    type: Optional[str] = Query(default=None, description="Filter by notification type"),
    read: Optional[bool] = Query(default=None, description="Filter by read state"),
    user_id: str = Depends(get_current_user_id),
    service: NotificationInboxService = Depends(get_notification_service)
):
    """Newest first. unreadCount covers the whole inbox, not just the filtered page."""
    notifications, pagination = service.list_notifications(user_id, page=page, limit=limit, type=type, read=read)
    return NotificationsResponse(
        success=True,
        notifications=notifications,
        pagination=pagination,
        unread_count=service.unread_count(user_id)
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    user_id: str = Depends(get_current_user_id),
    service: NotificationInboxService = Depends(get_notification_service)
):
    return UnreadCountResponse(success=True, count=service.unread_count(user_id))


@router.post("/read", response_model=MarkReadResponse)
def mark_read(
    request: Optional[MarkReadRequest] = None,
    user_id: str = Depends(get_current_user_id),
    service: NotificationInboxService = Depends(get_notification_service)
):
    """Mark the given notifications (or all of them) as read."""
    ids = request.notification_ids if request is not None else None
    return MarkReadResponse(success=True, updated=service.mark_read(user_id, ids))


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    service: NotificationInboxService = Depends(get_notification_service)
):
    service.delete_notification(user_id, notification_id)
    return MessageResponse(success=True, message="Notification deleted")
