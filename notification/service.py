#!/usr/bin/env python3
"""
Profile Event Publisher - decouples profile creation from match fanout.

Creating a profile publishes a "profile created" event. When Redis is
reachable the event is an RQ job on the matching queue, processed by
notification.worker; otherwise the task runs inline. Either way the
caller never sees a fanout failure.

Usage:
    from notification.service import ProfileEventPublisher

    publisher = ProfileEventPublisher(redis_url='redis://localhost:6379/0')
    publisher.publish_profile_created(profile.id)
"""

import os
import logging
from typing import Optional, Dict, Any

from redis import Redis
from rq import Queue, Retry

from core.config_loader import get_config
from core.matcher import InterestedUserFanout
from database.uow import matching_uow, notification_uow
from notification.dispatcher import MatchNotificationDispatcher
from notification.message_builder import NotificationMessageBuilder

logger = logging.getLogger(__name__)


class ProfileEventPublisher:
    """Schedule process_profile_created_task on RQ, or run it synchronously."""

    def __init__(
        self,
        redis_url: Optional[str] = None,
        use_async_queue: bool = True,
        queue_name: str = 'matching',
        enabled: bool = True
    ):
        """
        Args:
            redis_url: Redis connection URL
            use_async_queue: Whether to use async queue or sync mode
            queue_name: RQ queue the worker listens on
            enabled: If False, events are dropped (fanout switched off)
        """
        self.redis_url = redis_url or os.environ.get(
            'REDIS_URL',
            'redis://localhost:6379/0'
        )
        self.queue_name = queue_name
        self.enabled = enabled

        if not use_async_queue:
            # Explicitly disabled via config - force sync mode
            logger.info("Async queue disabled via config. Using sync mode.")
            self.redis_conn = None
            self.queue = None
            self.async_mode = False
        else:
            try:
                self.redis_conn = Redis.from_url(self.redis_url)
                # Validate connection with ping before using
                self.redis_conn.ping()
                self.queue = Queue(queue_name, connection=self.redis_conn)
                self.async_mode = True
                logger.info(f"Profile events will be queued on '{queue_name}'")
            except Exception as e:
                logger.error(f"Redis connection failed: {e}. Falling back to sync mode.")
                self.redis_conn = None
                self.queue = None
                self.async_mode = False

    @classmethod
    def from_config(cls) -> "ProfileEventPublisher":
        config = get_config().notifications
        return cls(
            redis_url=config.redis_url,
            use_async_queue=config.use_async_queue,
            queue_name=config.queue_name,
            enabled=config.enabled
        )

    def publish_profile_created(self, profile_id: Any) -> Optional[str]:
        """
        Publish a profile-created event.

        Returns:
            The RQ job id (async), the profile id (sync), or None when the
            event was dropped or could not be handled.
        """
        if not self.enabled:
            logger.debug(f"Match notifications disabled; skipping profile {profile_id}")
            return None

        profile_id = str(profile_id)
        try:
            if self.async_mode:
                # Retry 3 times with increasing delays
                retry_policy = Retry(max=3, interval=[30, 60, 120])
                job = self.queue.enqueue(
                    process_profile_created_task,
                    profile_id,
                    job_timeout='5m',
                    result_ttl=86400,
                    retry=retry_policy
                )
                logger.info(f"Queued profile-created event for {profile_id} as job {job.id}")
                return job.id

            process_profile_created_task(profile_id)
            return profile_id
        except Exception as e:
            logger.error(f"Failed to handle profile-created event for {profile_id}: {e}", exc_info=True)
            return None

    def get_queue_status(self) -> Dict[str, Any]:
        """Get queue status."""
        if not self.async_mode:
            return {'status': 'sync_mode', 'queue_length': 0}

        try:
            return {
                'status': 'active',
                'queue_length': len(self.queue),
                'redis_connected': self.redis_conn.ping()
            }
        except Exception as e:
            return {'status': 'error', 'error': str(e)}


# Worker task - must be at module level for RQ
def process_profile_created_task(profile_id: str) -> Dict[str, Any]:
    """
    Fan a newly created profile out to interested users (called by RQ worker).

    The profile and the notification-enabled preferences are read in one
    session; notifications are then written one recipient at a time.
    """
    config = get_config().notifications

    with matching_uow() as repos:
        profile = repos.profiles.get_by_id(profile_id)
        if profile is None:
            logger.warning(f"Profile {profile_id} not found; nothing to fan out")
            return {'profile_id': profile_id, 'interested': 0, 'delivered': 0, 'failed': 0}

        interested = InterestedUserFanout(repos.preferences).find_interested_users(profile)

        dispatcher = MatchNotificationDispatcher(
            message_builder=NotificationMessageBuilder(
                priority_high=config.priority_high,
                priority_medium=config.priority_medium
            )
        )
        summary = dispatcher.dispatch(profile, interested)

    return {
        'profile_id': profile_id,
        'interested': len(interested),
        'delivered': summary.delivered,
        'failed': summary.failed,
    }


def cleanup_old_notifications_task(days_old: Optional[int] = None) -> int:
    """
    Delete read notifications past the retention period.

    Args:
        days_old: Age in days; notifications.retention_days when omitted

    Returns:
        Number of notifications deleted
    """
    if days_old is None:
        days_old = get_config().notifications.retention_days

    with notification_uow() as repo:
        return repo.cleanup_old(days_old)
