#!/usr/bin/env python3
"""
Notification inbox service for the web application.
"""

import logging
from typing import Any, List, Optional, Tuple
from sqlalchemy.orm import Session

from core.exceptions import NotificationNotFoundException, InvalidPaginationException
from database.repositories import NotificationRepository
from ..models.responses import NotificationData, Pagination
from ..utils import safe_str, safe_datetime_iso, page_count

logger = logging.getLogger(__name__)


def notification_to_data(notification: Any) -> NotificationData:
    return NotificationData(
        id=safe_str(notification.id),
        recipient_id=safe_str(notification.recipient_id),
        sender_id=safe_str(notification.sender_id),
        type=notification.type,
        title=notification.title,
        message=notification.message,
        data=notification.data or {},
        read=bool(notification.read),
        read_at=safe_datetime_iso(notification.read_at),
        priority=notification.priority or 'medium',
        created_at=safe_datetime_iso(notification.created_at)
    )


class NotificationInboxService:
    """Read and manage the caller's in-app notifications."""

    def __init__(self, db: Session, max_page_size: int = 100):
        self.db = db
        self.repo = NotificationRepository(db)
        self.max_page_size = max_page_size

    def list_notifications(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 20,
        type: Optional[str] = None,
        read: Optional[bool] = None
    ) -> Tuple[List[NotificationData], Pagination]:
        if page < 1 or limit < 1 or limit > self.max_page_size:
            raise InvalidPaginationException(
                f"page must be >= 1 and limit between 1 and {self.max_page_size} (got page={page}, limit={limit})"
            )

        notifications, total = self.repo.list_for_recipient(user_id, page=page, limit=limit, type=type, read=read)
        pagination = Pagination(page=page, limit=limit, total=total, pages=page_count(total, limit))
        return [notification_to_data(n) for n in notifications], pagination

    def unread_count(self, user_id: str) -> int:
        return self.repo.unread_count(user_id)

    def mark_read(self, user_id: str, notification_ids: Optional[List[str]] = None) -> int:
        updated = self.repo.mark_read(user_id, notification_ids)
        self.db.commit()
        logger.info(f"Marked {updated} notifications read for user {user_id}")
        return updated

    def delete_notification(self, user_id: str, notification_id: str) -> None:
        """
        Raises:
            NotificationNotFoundException: If the caller has no such notification.
        """
        if not self.repo.delete_for_recipient(user_id, notification_id):
            raise NotificationNotFoundException(f"Notification {notification_id} not found")
        self.db.commit()
