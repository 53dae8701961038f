import uuid

from sqlalchemy import Column, Text, Boolean, TIMESTAMP, JSON, Uuid, Index, func
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base

NOTIFICATION_TYPES = ('like', 'match', 'message', 'system', 'profile_view', 'subscription', 'profile_update')
NOTIFICATION_PRIORITIES = ('low', 'medium', 'high')


class Notification(Base):
    """
    In-app notification delivered to a user.

    Match notifications are created by the profile-created fanout and carry
    matchScore / matchReasons in `data`.
    """
    __tablename__ = 'notification'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    recipient_id = Column(Text, nullable=False)
    sender_id = Column(Text, nullable=True)  # None for system notifications

    type = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON().with_variant(JSONB(), 'postgresql'), default=dict)

    read = Column(Boolean, nullable=False, default=False)
    read_at = Column(TIMESTAMP(timezone=True), nullable=True)
    priority = Column(Text, nullable=False, default='medium')

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_notification_recipient_read', 'recipient_id', 'read', 'created_at'),
        Index('idx_notification_recipient_type', 'recipient_id', 'type', 'created_at'),
    )
