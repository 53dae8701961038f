"""
Notification Module

Profile-created fanout and in-app match notifications.

Usage:
    from notification import ProfileEventPublisher

    publisher = ProfileEventPublisher.from_config()
    publisher.publish_profile_created(profile.id)
"""

from notification.message_builder import (
    NotificationMessageBuilder,
    MatchNotificationContent,
    MATCH_NOTIFICATION_TYPE,
)

from notification.dispatcher import (
    MatchNotificationDispatcher,
    DispatchSummary,
)

from notification.service import (
    ProfileEventPublisher,
    process_profile_created_task,
    cleanup_old_notifications_task,
)

__all__ = [
    # Messages
    'NotificationMessageBuilder',
    'MatchNotificationContent',
    'MATCH_NOTIFICATION_TYPE',
    # Dispatch
    'MatchNotificationDispatcher',
    'DispatchSummary',
    # Events
    'ProfileEventPublisher',
    'process_profile_created_task',
    # Maintenance
    'cleanup_old_notifications_task',
]
