import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Any, Dict, Tuple
from sqlalchemy import select, func, update, delete

from database.models import Notification
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)


class NotificationRepository(BaseRepository):
    def create(
        self,
        recipient_id: str,
        type: str,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
        priority: str = 'medium',
        sender_id: Optional[str] = None
    ) -> Notification:
        notification = Notification(
            recipient_id=str(recipient_id),
            sender_id=str(sender_id) if sender_id is not None else None,
            type=type,
            title=title,
            message=message,
            data=data or {},
            priority=priority,
            read=False
        )
        self.db.add(notification)
        self.db.flush()
        return notification

    def list_for_recipient(
        self,
        recipient_id: str,
        page: int = 1,
        limit: int = 20,
        type: Optional[str] = None,
        read: Optional[bool] = None
    ) -> Tuple[List[Notification], int]:
        """Return one page of a recipient's notifications (newest first) and the total count."""
        conditions = [Notification.recipient_id == str(recipient_id)]
        if type is not None:
            conditions.append(Notification.type == type)
        if read is not None:
            conditions.append(Notification.read.is_(read))

        total = self.db.execute(
            select(func.count()).select_from(Notification).where(*conditions)
        ).scalar_one()

        stmt = (
            select(Notification)
            .where(*conditions)
            .order_by(Notification.created_at.desc(), Notification.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all()), total

    def unread_count(self, recipient_id: str) -> int:
        stmt = select(func.count()).select_from(Notification).where(
            Notification.recipient_id == str(recipient_id),
            Notification.read.is_(False)
        )
        return self.db.execute(stmt).scalar_one()

    def mark_read(self, recipient_id: str, notification_ids: Optional[List[Any]] = None) -> int:
        stmt = update(Notification).where(
            Notification.recipient_id == str(recipient_id),
            Notification.read.is_(False)
        )
        if notification_ids:
            ids = [i for i in (as_uuid(n) for n in notification_ids) if i is not None]
            stmt = stmt.where(Notification.id.in_(ids))

        result = self.db.execute(
            stmt.values(read=True, read_at=datetime.now(timezone.utc)).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    def delete_for_recipient(self, recipient_id: str, notification_id: Any) -> bool:
        notification_uuid = as_uuid(notification_id)
        if notification_uuid is None:
            return False
        stmt = select(Notification).where(
            Notification.id == notification_uuid,
            Notification.recipient_id == str(recipient_id)
        )
        notification = self.db.execute(stmt).scalar_one_or_none()
        if notification is None:
            return False

        self.db.delete(notification)
        self.db.flush()
        return True

    def cleanup_old(self, days_old: int = 30, now: Optional[datetime] = None) -> int:
        """
        Delete read notifications created more than `days_old` days ago.

        Unread notifications are kept regardless of age.

        Returns:
            Number of notifications deleted
        """
        cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=days_old)
        stmt = delete(Notification).where(
            Notification.read.is_(True),
            Notification.created_at < cutoff
        )
        result = self.db.execute(stmt.execution_options(synchronize_session=False))
        deleted = result.rowcount or 0
        logger.info(f"Deleted {deleted} read notifications older than {days_old} days")
        return deleted
